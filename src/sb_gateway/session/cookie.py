"""Signed session-id cookie.

The cookie carries only a random session id, signed with SESSION_SECRET
(itsdangerous, same scheme Starlette's SessionMiddleware uses). The username
lives server-side in the session store. A tampered or expired cookie reads
as "no session".
"""

import secrets

from itsdangerous import BadSignature, TimestampSigner
from starlette.requests import Request
from starlette.responses import Response

from config.settings import settings

_signer = TimestampSigner(settings.SESSION_SECRET)


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def sign_session_id(session_id: str) -> str:
    return _signer.sign(session_id).decode("utf-8")


def unsign_session_id(value: str) -> str | None:
    try:
        return _signer.unsign(value, max_age=settings.SESSION_MAX_AGE).decode("utf-8")
    except BadSignature:  # SignatureExpired is a subclass
        return None


def read_session_id(request: Request) -> str | None:
    raw = request.cookies.get(settings.SESSION_COOKIE)
    return unsign_session_id(raw) if raw else None


def set_session_cookie(response: Response, session_id: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE,
        value=sign_session_id(session_id),
        max_age=settings.SESSION_MAX_AGE,
        httponly=True,
        secure=settings.SESSION_HTTPS_ONLY,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE,
        httponly=True,
        secure=settings.SESSION_HTTPS_ONLY,
        samesite="lax",
    )
