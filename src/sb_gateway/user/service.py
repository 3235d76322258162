"""User service: register, login, logout.

The repository and session store are injected, so the same logic runs
against any account store and any session backend.
"""

import asyncio
import logging

from config.settings import settings
from src.sb_account.domain.models import Account
from src.sb_account.domain.repository import AccountRepositoryProtocol
from src.sb_common.errors import (
    IncorrectPasswordError,
    UserExistsError,
    UserNotFoundError,
)
from src.sb_common.locks import KeyedLock, username_locks
from src.sb_gateway.auth.password import hash_password, verify_password
from src.sb_gateway.session.store import SessionStoreProtocol

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        repo: AccountRepositoryProtocol,
        sessions: SessionStoreProtocol,
        locks: KeyedLock | None = None,
    ) -> None:
        self._repo = repo
        self._sessions = sessions
        self._locks = locks or username_locks

    async def register(self, username: str, password: str) -> Account:
        """Create an account with the default balance.

        The existence check and the insert run under the username lock, so
        two concurrent registrations of one name cannot both pass the check.
        """
        async with self._locks.hold(username):
            if await self._repo.find_by_username(username) is not None:
                raise UserExistsError()
            # bcrypt is CPU-bound; keep it off the event loop
            password_hash = await asyncio.to_thread(hash_password, password)
            account = await self._repo.insert(
                username, password_hash, settings.DEFAULT_BALANCE
            )

        logger.info("Registered user %s", username)
        return account

    async def login(
        self,
        session_id: str,
        username: str,
        password: str,
        previous_session_id: str | None = None,
    ) -> Account:
        """Check credentials and bind the fresh ``session_id`` to ``username``.

        Unknown user and wrong password are distinct errors (404 vs 401).
        On success the caller's previous session, if any, is dropped.
        """
        account = await self._repo.find_by_username(username)
        if account is None:
            raise UserNotFoundError()

        matched = await asyncio.to_thread(verify_password, password, account.password_hash)
        if not matched:
            logger.warning("Failed login for user %s", username)
            raise IncorrectPasswordError()

        await self._sessions.set(session_id, username)
        if previous_session_id is not None and previous_session_id != session_id:
            await self._sessions.delete(previous_session_id)
        logger.info("User %s logged in", username)
        return account

    async def logout(self, session_id: str | None) -> None:
        if session_id is not None:
            await self._sessions.delete(session_id)
