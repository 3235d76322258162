"""Repository Protocol: dependency inversion for testability.

Handlers only ever see this interface; which store backs it (spreadsheet,
SQL table, in-memory dict) is chosen by STORE_BACKEND.
Unit tests inject a mock that conforms to this Protocol.
"""

from typing import Protocol

from src.sb_account.domain.models import Account


class AccountRepositoryProtocol(Protocol):
    async def find_by_username(self, username: str) -> Account | None: ...

    async def insert(
        self, username: str, password_hash: str, balance: int
    ) -> Account:
        """Raises UserExistsError if the username is already taken."""
        ...

    async def update_balance(self, username: str, amount: int) -> Account | None:
        """Apply a signed delta (floor 0). Returns None if the user is absent."""
        ...
