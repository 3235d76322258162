"""FastAPI dependencies: session id and the logged-in session.

Usage in any protected router:
    from src.sb_gateway.auth.dependencies import CurrentSession, get_current_session

    @router.get("/protected")
    async def protected(session: CurrentSession = Depends(get_current_session)):
        ...
"""

from dataclasses import dataclass

from fastapi import Depends, Request

from src.sb_common.errors import NotLoggedInError
from src.sb_gateway.session.cookie import read_session_id
from src.sb_gateway.session.store import SessionStoreProtocol, get_session_store


@dataclass(frozen=True)
class CurrentSession:
    session_id: str
    username: str


def get_session_id(request: Request) -> str | None:
    """Session id from the signed cookie, or None if absent/tampered."""
    return read_session_id(request)


async def get_current_session(
    session_id: str | None = Depends(get_session_id),
    sessions: SessionStoreProtocol = Depends(get_session_store),
) -> CurrentSession:
    """Raises NotLoggedInError (401) unless the session is authenticated."""
    if session_id is None:
        raise NotLoggedInError()
    username = await sessions.get(session_id)
    if username is None:
        raise NotLoggedInError()
    return CurrentSession(session_id=session_id, username=username)
