"""InMemoryAccountRepository: dict-backed store for local dev and tests.

Lives for the process lifetime only (STORE_BACKEND=memory).
"""

from src.sb_account.domain.models import Account, apply_balance_delta
from src.sb_common.errors import UserExistsError


class InMemoryAccountRepository:
    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}

    async def find_by_username(self, username: str) -> Account | None:
        account = self._accounts.get(username)
        # Hand out copies so callers cannot mutate stored state
        return Account(**vars(account)) if account else None

    async def insert(self, username: str, password_hash: str, balance: int) -> Account:
        if username in self._accounts:
            raise UserExistsError()
        self._accounts[username] = Account(username, password_hash, balance)
        return Account(username, password_hash, balance)

    async def update_balance(self, username: str, amount: int) -> Account | None:
        account = self._accounts.get(username)
        if account is None:
            return None
        account.balance = apply_balance_delta(account.balance, amount)
        return Account(**vars(account))

    def remove(self, username: str) -> None:
        """Drop a record, as an external edit of the store would."""
        self._accounts.pop(username, None)
