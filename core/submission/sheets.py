"""
Submission Sheet - Google Sheets Append with Header Bootstrap

Appends join submissions to a worksheet tab. Before each append the first
row of the range is read; when it is empty the header row is written in
the same append call, so the header lands exactly once on an empty sheet.

The read-then-append is not atomic. Two first submissions arriving
together can both see an empty sheet and both write a header row. No lock
is taken: whether to deduplicate, lock, or accept the duplicate is left to
whoever owns the sheet.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Final, Optional, Sequence

import gspread
from google.oauth2.service_account import Credentials
from gspread.utils import absolute_range_name, rowcol_to_a1

from core.submission.credentials import SheetsConfigError, load_service_account_info
from core.submission.rows import HEADER_COLUMNS
from utils.config import Config


logger = logging.getLogger(__name__)

SCOPES: Final[list[str]] = ["https://www.googleapis.com/auth/spreadsheets"]

DEFAULT_SHEET_NAME: Final[str] = "Sheet1"

VALUE_INPUT_OPTION: Final[str] = "USER_ENTERED"

# Last column letter covering every header column ("AA" for 27 columns)
LAST_COLUMN: Final[str] = rowcol_to_a1(1, len(HEADER_COLUMNS)).rstrip("0123456789")


class SubmissionSheet:
    """
    One worksheet tab receiving join submissions.

    Wraps a gspread Spreadsheet (or any object exposing values_get and
    values_append with the same signatures).
    """

    def __init__(self, spreadsheet: Any, sheet_name: str = DEFAULT_SHEET_NAME):
        self.spreadsheet = spreadsheet
        self.sheet_name = sheet_name or DEFAULT_SHEET_NAME

    @property
    def header_range(self) -> str:
        return absolute_range_name(self.sheet_name, f"A1:{LAST_COLUMN}1")

    @property
    def append_range(self) -> str:
        return absolute_range_name(self.sheet_name, f"A:{LAST_COLUMN}")

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "SubmissionSheet":
        """
        Authorise with the service account and open the target spreadsheet.

        Args:
            config: Configuration (loaded from environment if omitted)

        Returns:
            SubmissionSheet for the configured tab

        Raises:
            SheetsConfigError: If the sheet ID or credentials are missing or invalid
        """
        config = config or Config.load()

        if not config.google_sheet_id:
            raise SheetsConfigError("Missing GOOGLE_SHEET_ID environment variable.")

        info = load_service_account_info(config.google_service_account_json)
        credentials = Credentials.from_service_account_info(info, scopes=SCOPES)
        client = gspread.authorize(credentials)
        spreadsheet = client.open_by_key(config.google_sheet_id)
        return cls(spreadsheet, config.google_sheet_name)

    def has_header(self) -> bool:
        """Check whether the first row of the range holds any value."""
        response = self.spreadsheet.values_get(self.header_range)
        values = response.get("values") or []
        return bool(values and values[0])

    def append_submission_row(self, row: Sequence[str]) -> int:
        """
        Append one submission row, writing the header first on an empty sheet.

        Args:
            row: Cell values in HEADER_COLUMNS order

        Returns:
            Number of rows written (2 when the header was bootstrapped)
        """
        rows = [list(row)]
        if not self.has_header():
            logger.info("Sheet %r has no header row; writing it with this submission", self.sheet_name)
            rows.insert(0, list(HEADER_COLUMNS))

        self.spreadsheet.values_append(
            self.append_range,
            params={"valueInputOption": VALUE_INPUT_OPTION},
            body={"values": rows},
        )
        logger.info("Appended %d row(s) to sheet %r", len(rows), self.sheet_name)
        return len(rows)


SheetFactory = Callable[[], SubmissionSheet]


def get_submission_sheet() -> SubmissionSheet:
    """Build the submission sheet from the current environment."""
    return SubmissionSheet.from_config(Config.load())
