"""
Join Submission Module

Server-side handling of join form submissions: payload parsing and
re-validation, mapping to the fixed spreadsheet row, and appending to
Google Sheets with a one-time header row.
"""

from core.submission.payload import (
    JoinPayload,
    JoinPayloadExtras,
    PayloadRejection,
    parse_join_payload,
)
from core.submission.rows import (
    HEADER_COLUMNS,
    row_from_payload,
)
from core.submission.credentials import (
    SheetsConfigError,
    load_service_account_info,
)
from core.submission.sheets import (
    SubmissionSheet,
    SheetFactory,
    get_submission_sheet,
)
from core.submission.handler import (
    JoinResult,
    submit_join_request,
)

__all__ = [
    # Payload
    "JoinPayload",
    "JoinPayloadExtras",
    "PayloadRejection",
    "parse_join_payload",
    # Rows
    "HEADER_COLUMNS",
    "row_from_payload",
    # Sheets
    "SheetsConfigError",
    "load_service_account_info",
    "SubmissionSheet",
    "SheetFactory",
    "get_submission_sheet",
    # Handler
    "JoinResult",
    "submit_join_request",
]
