"""
Join Routes - Web API for Business Intake Submissions

Routes:
- POST /api/join           - Validate and append a submission to the sheet
- POST /api/join/validate  - Check form values against the intake rules

The join page calls /validate before packaging the payload, so the browser
and the server apply the same rule table.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from core.intake import validate_intake_data
from core.submission import SheetFactory, get_submission_sheet, submit_join_request
from core.submission.handler import INVALID_JSON_MESSAGE, decode_json_body


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter(prefix="/api/join", tags=["join"])


def get_sheet_factory() -> SheetFactory:
    """Dependency returning the spreadsheet factory used for appends."""
    return get_submission_sheet


# =============================================================================
# Submission
# =============================================================================


@router.post("")
async def join(
    request: Request,
    sheet_factory: SheetFactory = Depends(get_sheet_factory),
):
    """
    Accept a join submission.

    Returns:
        - 200 {ok: true, columns: [...]} when the row was appended
        - 400 {error} for a malformed body
        - 400 {error, details} for validation failures
        - 500 {error} when the spreadsheet append fails
    """
    raw_body = await request.body()
    # Sheets calls block; keep them off the event loop
    result = await run_in_threadpool(submit_join_request, raw_body, sheet_factory)
    return JSONResponse(result.content, status_code=result.status_code)


@router.post("/validate")
async def validate(request: Request):
    """Validate form values (tags as a comma string) without saving."""
    try:
        body = decode_json_body(await request.body())
    except ValueError:
        return JSONResponse({"error": INVALID_JSON_MESSAGE}, status_code=400)

    validation = validate_intake_data(body)
    if validation.is_blocked:
        return JSONResponse(
            {"valid": False, "details": validation.details()},
            status_code=422,
        )
    return JSONResponse({"valid": True})
