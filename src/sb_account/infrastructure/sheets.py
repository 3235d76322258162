"""Row-store accessor over a Google Sheets document.

The first worksheet is treated as a table: row 1 holds the column headers,
every following row is one record. A handle is opened per operation; nothing
is cached between requests.

All calls here are blocking (gspread uses requests under the hood). Callers
on the event loop must run them in a worker thread.
"""

import logging
from typing import Any

import gspread
from gspread.utils import ValueInputOption, a1_to_rowcol, rowcol_to_a1

from src.sb_common.errors import StoreError

logger = logging.getLogger(__name__)

_TOKEN_URI = "https://oauth2.googleapis.com/token"


def service_account_info(client_email: str, private_key: str) -> dict[str, str]:
    """Build the minimal service-account dict google-auth needs."""
    return {
        "type": "service_account",
        "client_email": client_email,
        "private_key": private_key,
        "token_uri": _TOKEN_URI,
    }


class SheetRow:
    """One data row, addressable by header name. Mutations stay local until save()."""

    def __init__(
        self,
        worksheet: gspread.Worksheet,
        row_number: int,
        headers: list[str],
        values: list[Any],
    ) -> None:
        self._worksheet = worksheet
        self.row_number = row_number
        self._headers = headers
        padded = list(values) + [""] * (len(headers) - len(values))
        self._values: dict[str, Any] = dict(zip(headers, padded))

    def __getitem__(self, field: str) -> Any:
        return self._values[field]

    def __setitem__(self, field: str, value: Any) -> None:
        if field not in self._values:
            raise StoreError(f"Unknown column {field!r}")
        self._values[field] = value

    def get(self, field: str, default: Any = None) -> Any:
        return self._values.get(field, default)

    def save(self) -> None:
        """Write this row's values back to its own location in the sheet."""
        start = rowcol_to_a1(self.row_number, 1)
        end = rowcol_to_a1(self.row_number, len(self._headers))
        self._worksheet.update(
            values=[[self._values[h] for h in self._headers]],
            range_name=f"{start}:{end}",
            value_input_option=ValueInputOption.raw,
        )


class SheetTable:
    """Handle over the first worksheet of a spreadsheet, headers resolved."""

    def __init__(self, worksheet: gspread.Worksheet, headers: list[str]) -> None:
        self._worksheet = worksheet
        self.headers = headers

    @classmethod
    def open(
        cls,
        credentials: dict[str, str],
        spreadsheet_id: str,
        required: tuple[str, ...] = (),
    ) -> "SheetTable":
        """Authenticate, open the document and load the header row.

        Raises StoreError if any of ``required`` is missing from the header row.
        """
        client = gspread.service_account_from_dict(credentials)
        worksheet = client.open_by_key(spreadsheet_id).get_worksheet(0)
        headers = [h.strip() for h in worksheet.row_values(1)]
        if not any(headers):
            raise StoreError(f"Spreadsheet {spreadsheet_id} has no header row")
        missing = [h for h in required if h not in headers]
        if missing:
            raise StoreError(f"Spreadsheet {spreadsheet_id} is missing columns: {missing}")
        return cls(worksheet, headers)

    def list_rows(self) -> list[SheetRow]:
        values = self._worksheet.get_all_values()
        # Row 1 is the header row, so data starts at sheet row 2
        return [
            SheetRow(self._worksheet, index + 2, self.headers, row)
            for index, row in enumerate(values[1:])
        ]

    def append_row(self, fields: dict[str, Any]) -> SheetRow:
        unknown = set(fields) - set(self.headers)
        if unknown:
            raise StoreError(f"Columns not in header row: {sorted(unknown)}")

        values = [fields.get(h, "") for h in self.headers]
        response = self._worksheet.append_row(
            values,
            value_input_option=ValueInputOption.raw,
        )
        # e.g. "Sheet1!A5:C5" -> row 5
        updated_range: str = response["updates"]["updatedRange"]
        first_cell = updated_range.split("!")[-1].split(":")[0]
        row_number, _ = a1_to_rowcol(first_cell)
        logger.debug("Appended row %d to %s", row_number, self._worksheet.title)
        return SheetRow(self._worksheet, row_number, self.headers, values)
