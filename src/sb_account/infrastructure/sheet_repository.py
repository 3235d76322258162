"""SheetAccountRepository: AccountRepositoryProtocol over the spreadsheet.

Every operation opens the document, scans all rows and (optionally) writes
one row back. Nothing here is atomic at the store level; the services hold a
per-username lock around check-then-insert and read-then-save.

Failures from gspread, google-auth or the network are surfaced as
StoreError (HTTP 500 for that request). No retry.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from google.auth.exceptions import GoogleAuthError
from gspread.exceptions import GSpreadException
from requests import RequestException

from config.settings import settings
from src.sb_account.domain.models import Account, apply_balance_delta
from src.sb_account.infrastructure.sheets import SheetRow, SheetTable, service_account_info
from src.sb_common.errors import StoreError, UserExistsError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Column headers expected in row 1 of the first worksheet
USERNAME = "Username"
PASSWORD = "Password"
BALANCE = "Balance"
REQUIRED_COLUMNS = (USERNAME, PASSWORD, BALANCE)


def _find_row(table: SheetTable, username: str) -> SheetRow | None:
    for row in table.list_rows():
        if row.get(USERNAME) == username:
            return row
    return None


def _parse_balance(raw: Any) -> int:
    try:
        return int(str(raw).replace(",", "").strip())
    except ValueError:
        raise StoreError(f"Malformed {BALANCE} value: {raw!r}") from None


def _row_to_account(row: SheetRow) -> Account:
    return Account(
        username=row[USERNAME],
        password_hash=row[PASSWORD],
        balance=_parse_balance(row[BALANCE]),
    )


class SheetAccountRepository:
    def __init__(
        self,
        credentials: dict[str, str] | None = None,
        spreadsheet_id: str | None = None,
    ) -> None:
        self._credentials = credentials or service_account_info(
            settings.GOOGLE_CLIENT_EMAIL, settings.GOOGLE_PRIVATE_KEY
        )
        self._spreadsheet_id = spreadsheet_id or settings.SPREADSHEET_ID

    async def find_by_username(self, username: str) -> Account | None:
        return await self._call(self._find_sync, username)

    async def insert(self, username: str, password_hash: str, balance: int) -> Account:
        return await self._call(self._insert_sync, username, password_hash, balance)

    async def update_balance(self, username: str, amount: int) -> Account | None:
        return await self._call(self._update_balance_sync, username, amount)

    # -- blocking bodies, run in a worker thread -------------------------------

    def _open(self) -> SheetTable:
        return SheetTable.open(self._credentials, self._spreadsheet_id, REQUIRED_COLUMNS)

    def _find_sync(self, username: str) -> Account | None:
        row = _find_row(self._open(), username)
        return _row_to_account(row) if row else None

    def _insert_sync(self, username: str, password_hash: str, balance: int) -> Account:
        table = self._open()
        if _find_row(table, username) is not None:
            raise UserExistsError()
        row = table.append_row(
            {USERNAME: username, PASSWORD: password_hash, BALANCE: balance}
        )
        return _row_to_account(row)

    def _update_balance_sync(self, username: str, amount: int) -> Account | None:
        row = _find_row(self._open(), username)
        if row is None:
            return None
        row[BALANCE] = apply_balance_delta(_parse_balance(row[BALANCE]), amount)
        row.save()
        return _row_to_account(row)

    async def _call(self, fn: Callable[..., T], *args: Any) -> T:
        try:
            return await asyncio.to_thread(fn, *args)
        # ValueError: unloadable private key; KeyError: row shape the client did not expect
        except (GSpreadException, GoogleAuthError, RequestException, ValueError, KeyError) as exc:
            raise StoreError(f"{type(exc).__name__}: {exc}") from exc
