"""Unit tests for SheetAccountRepository over an in-memory fake worksheet."""

from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import requests
from gspread.exceptions import SpreadsheetNotFound
from gspread.utils import a1_to_rowcol

from src.sb_account.infrastructure.sheet_repository import SheetAccountRepository
from src.sb_account.infrastructure.sheets import SheetTable, service_account_info
from src.sb_common.errors import StoreError, UserExistsError

HEADERS = ["Username", "Password", "Balance"]


class FakeWorksheet:
    """Just enough of gspread.Worksheet for SheetTable."""

    title = "Sheet1"

    def __init__(self, rows: list[list[Any]], headers: list[str] = HEADERS) -> None:
        self.cells: list[list[Any]] = [list(headers), *[list(r) for r in rows]]

    def row_values(self, row: int) -> list[str]:
        return [str(v) for v in self.cells[row - 1]]

    def get_all_values(self) -> list[list[str]]:
        return [[str(v) for v in r] for r in self.cells]

    def append_row(self, values: list[Any], value_input_option: str) -> dict[str, Any]:
        self.cells.append(list(values))
        n = len(self.cells)
        return {"updates": {"updatedRange": f"Sheet1!A{n}:C{n}"}}

    def update(
        self, values: list[list[Any]], range_name: str, value_input_option: str
    ) -> None:
        row, _ = a1_to_rowcol(range_name.split(":")[0])
        self.cells[row - 1] = list(values[0])


@pytest.fixture
def worksheet() -> FakeWorksheet:
    return FakeWorksheet([["alice", "$2b$10$hash", "1000"]])


@pytest.fixture
def repo(worksheet: FakeWorksheet) -> Iterator[SheetAccountRepository]:
    with patch.object(
        SheetTable, "open", side_effect=lambda *_: SheetTable(worksheet, HEADERS)
    ):
        yield SheetAccountRepository(credentials={"client_email": "x"}, spreadsheet_id="doc")


class TestFind:
    async def test_finds_existing_user(self, repo: SheetAccountRepository) -> None:
        account = await repo.find_by_username("alice")
        assert account is not None
        assert account.balance == 1000
        assert account.password_hash == "$2b$10$hash"

    async def test_match_is_case_sensitive(self, repo: SheetAccountRepository) -> None:
        assert await repo.find_by_username("Alice") is None


class TestInsert:
    async def test_appends_new_row(
        self, repo: SheetAccountRepository, worksheet: FakeWorksheet
    ) -> None:
        account = await repo.insert("bob", "$2b$10$other", 1000)

        assert account.username == "bob"
        assert worksheet.cells[-1] == ["bob", "$2b$10$other", 1000]

    async def test_duplicate_raises(
        self, repo: SheetAccountRepository, worksheet: FakeWorksheet
    ) -> None:
        with pytest.raises(UserExistsError):
            await repo.insert("alice", "$2b$10$other", 1000)
        assert len(worksheet.cells) == 2


class TestUpdateBalance:
    async def test_applies_delta_and_saves(
        self, repo: SheetAccountRepository, worksheet: FakeWorksheet
    ) -> None:
        account = await repo.update_balance("alice", 250)

        assert account is not None
        assert account.balance == 1250
        assert worksheet.cells[1][2] == 1250

    async def test_clamps_at_zero(
        self, repo: SheetAccountRepository, worksheet: FakeWorksheet
    ) -> None:
        account = await repo.update_balance("alice", -2000)
        assert account is not None
        assert account.balance == 0

    async def test_unknown_user_returns_none(self, repo: SheetAccountRepository) -> None:
        assert await repo.update_balance("nobody", 10) is None

    async def test_malformed_balance_is_store_error(
        self, repo: SheetAccountRepository, worksheet: FakeWorksheet
    ) -> None:
        worksheet.cells[1][2] = "lots"
        with pytest.raises(StoreError):
            await repo.update_balance("alice", 10)


class TestStoreFailures:
    async def test_gspread_error_becomes_store_error(self) -> None:
        repo = SheetAccountRepository(credentials={"client_email": "x"}, spreadsheet_id="doc")
        with (
            patch.object(SheetTable, "open", side_effect=SpreadsheetNotFound()),
            pytest.raises(StoreError),
        ):
            await repo.find_by_username("alice")

    async def test_network_error_becomes_store_error(self) -> None:
        repo = SheetAccountRepository(credentials={"client_email": "x"}, spreadsheet_id="doc")
        with (
            patch.object(SheetTable, "open", side_effect=requests.ConnectionError("down")),
            pytest.raises(StoreError),
        ):
            await repo.find_by_username("alice")

    async def test_unloadable_private_key_becomes_store_error(self) -> None:
        repo = SheetAccountRepository(
            credentials=service_account_info("svc@example.com", "garbage"),
            spreadsheet_id="doc",
        )
        with pytest.raises(StoreError):
            await repo.find_by_username("alice")

    async def test_missing_password_column_becomes_store_error(self) -> None:
        worksheet = FakeWorksheet([["alice", "1000"]], headers=["Username", "Balance"])
        client = MagicMock()
        client.open_by_key.return_value.get_worksheet.return_value = worksheet
        repo = SheetAccountRepository(credentials={"client_email": "x"}, spreadsheet_id="doc")

        with (
            patch(
                "src.sb_account.infrastructure.sheets.gspread.service_account_from_dict",
                return_value=client,
            ),
            pytest.raises(StoreError),
        ):
            await repo.find_by_username("alice")

    async def test_unexpected_append_response_becomes_store_error(
        self, repo: SheetAccountRepository, worksheet: FakeWorksheet
    ) -> None:
        worksheet.append_row = lambda values, value_input_option: {}  # type: ignore[method-assign]
        with pytest.raises(StoreError):
            await repo.insert("bob", "$2b$10$other", 1000)
