"""Server-side session store: session id -> logged-in username.

Services receive a store through this Protocol, so the in-process dict can be
swapped for Redis (or anything else) without touching handler logic.
Selected by SESSION_BACKEND.
"""

import logging
from typing import Protocol

from config.settings import settings
from src.sb_common.redis_client import get_redis

logger = logging.getLogger(__name__)


class SessionStoreProtocol(Protocol):
    async def get(self, session_id: str) -> str | None: ...

    async def set(self, session_id: str, username: str) -> None: ...

    async def delete(self, session_id: str) -> None: ...


class InMemorySessionStore:
    """Process-held mapping. Lifetime = process uptime; cleared on restart."""

    def __init__(self) -> None:
        self._sessions: dict[str, str] = {}

    async def get(self, session_id: str) -> str | None:
        return self._sessions.get(session_id)

    async def set(self, session_id: str, username: str) -> None:
        self._sessions[session_id] = username

    async def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)


class RedisSessionStore:
    """Shared store for multi-process deployments. Entries expire with the cookie."""

    KEY_PREFIX = "session:"

    def __init__(self, ttl_seconds: int | None = None) -> None:
        self._ttl = ttl_seconds if ttl_seconds is not None else settings.SESSION_MAX_AGE

    def _key(self, session_id: str) -> str:
        return f"{self.KEY_PREFIX}{session_id}"

    async def get(self, session_id: str) -> str | None:
        redis = await get_redis()
        value = await redis.get(self._key(session_id))
        return str(value) if value is not None else None

    async def set(self, session_id: str, username: str) -> None:
        redis = await get_redis()
        await redis.set(self._key(session_id), username, ex=self._ttl)

    async def delete(self, session_id: str) -> None:
        redis = await get_redis()
        await redis.delete(self._key(session_id))


_store: SessionStoreProtocol | None = None


def get_session_store() -> SessionStoreProtocol:
    """FastAPI dependency: the process-wide session store."""
    global _store  # noqa: PLW0603
    if _store is None:
        if settings.SESSION_BACKEND == "redis":
            _store = RedisSessionStore()
        else:
            _store = InMemorySessionStore()
        logger.info("Session store backend: %s", settings.SESSION_BACKEND)
    return _store
