"""
Join Submission Handler

Composes the server side of POST /api/join independently of the web
framework:

1. Parse the raw body as JSON                       -> 400 on failure
2. Validate the extras and re-validate the record    -> 400 with details
3. Map the payload to the fixed column order
4. Append to the spreadsheet (header bootstrap)      -> 500 on any failure

Validation failures carry field-level detail back to the caller;
integration failures collapse to one generic message and are logged in
full for operators. Nothing is retried.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Union

from core.submission.payload import PayloadRejection, parse_join_payload
from core.submission.rows import HEADER_COLUMNS, row_from_payload
from core.submission.sheets import SheetFactory, get_submission_sheet


logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON body."
SAVE_FAILED_MESSAGE = "Failed to save submission. Please try again."


@dataclass(frozen=True)
class JoinResult:
    """HTTP status code and JSON content for a join request."""

    status_code: int
    content: dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def decode_json_body(raw_body: Union[bytes, str]) -> Any:
    """
    Decode a request body as JSON.

    Raises:
        ValueError: If the body is empty, not UTF-8, not JSON, or nested
            too deeply to decode
    """
    if isinstance(raw_body, bytes):
        raw_body = raw_body.decode("utf-8")
    try:
        return json.loads(raw_body)
    except RecursionError as exc:
        raise ValueError("JSON body is nested too deeply") from exc


def submit_join_request(
    raw_body: Union[bytes, str],
    sheet_factory: SheetFactory = get_submission_sheet,
) -> JoinResult:
    """
    Handle one join submission end to end.

    Args:
        raw_body: Request body as received
        sheet_factory: Builds the SubmissionSheet; called only once the
            payload is valid, so configuration errors surface as 500s

    Returns:
        JoinResult ready to serialise as the HTTP response
    """
    try:
        body = decode_json_body(raw_body)
    except ValueError:
        return JoinResult(400, {"error": INVALID_JSON_MESSAGE})

    parsed = parse_join_payload(body)
    if isinstance(parsed, PayloadRejection):
        return JoinResult(400, parsed.to_dict())

    row = row_from_payload(parsed)

    try:
        sheet = sheet_factory()
        sheet.append_submission_row(row)
    except Exception:
        logger.exception("Failed to append submission row")
        return JoinResult(500, {"error": SAVE_FAILED_MESSAGE})

    return JoinResult(200, {"ok": True, "columns": list(HEADER_COLUMNS)})
