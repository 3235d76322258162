"""AccountApplicationService: balance reads and updates for a session.

A session whose username has disappeared from the store is invalidated:
the session entry is dropped and SessionInvalidatedError (401) is raised.
"""

import logging
from typing import NoReturn

from src.sb_account.application.schemas import BalanceResponse
from src.sb_account.domain.repository import AccountRepositoryProtocol
from src.sb_common.errors import SessionInvalidatedError
from src.sb_common.locks import KeyedLock, username_locks
from src.sb_gateway.auth.dependencies import CurrentSession
from src.sb_gateway.session.store import SessionStoreProtocol

logger = logging.getLogger(__name__)


class AccountApplicationService:
    def __init__(
        self,
        repo: AccountRepositoryProtocol,
        sessions: SessionStoreProtocol,
        locks: KeyedLock | None = None,
    ) -> None:
        self._repo = repo
        self._sessions = sessions
        self._locks = locks or username_locks

    async def get_balance(self, session: CurrentSession) -> BalanceResponse:
        account = await self._repo.find_by_username(session.username)
        if account is None:
            await self._invalidate(session)
        return BalanceResponse(balance=account.balance)

    async def update_balance(self, session: CurrentSession, amount: int) -> BalanceResponse:
        # Serialize read-modify-write per user; the SQL store is atomic anyway
        async with self._locks.hold(session.username):
            account = await self._repo.update_balance(session.username, amount)
        if account is None:
            await self._invalidate(session)

        logger.info(
            "Balance of %s changed by %+d to %d", session.username, amount, account.balance
        )
        return BalanceResponse(balance=account.balance)

    async def _invalidate(self, session: CurrentSession) -> NoReturn:
        logger.warning(
            "Session references missing user %s; invalidating", session.username
        )
        await self._sessions.delete(session.session_id)
        raise SessionInvalidatedError()
