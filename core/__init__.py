"""
Join Service - Core Business Logic

This module provides the business intake pipeline:
1. Intake schema (BusinessIntakeRecord, field rules)
2. Validation (field-path errors, cross-field rules)
3. Form packaging (phone sanitising, tags, Not_USA)
4. Submission (payload re-validation, row mapping)
5. Google Sheets append (header bootstrap)
"""

# Business Intake
from .intake import (
    BusinessIntakeRecord,
    AdditionalLocation,
    BusinessType,
    IntakeValidationResult,
    BUSINESS_CATEGORIES,
    validate_intake_data,
    create_record,
    build_join_payload,
)

# Join Submission
from .submission import (
    JoinPayload,
    HEADER_COLUMNS,
    row_from_payload,
    SubmissionSheet,
    SheetsConfigError,
    JoinResult,
    submit_join_request,
)

__all__ = [
    # Business Intake
    "BusinessIntakeRecord",
    "AdditionalLocation",
    "BusinessType",
    "IntakeValidationResult",
    "BUSINESS_CATEGORIES",
    "validate_intake_data",
    "create_record",
    "build_join_payload",
    # Join Submission
    "JoinPayload",
    "HEADER_COLUMNS",
    "row_from_payload",
    "SubmissionSheet",
    "SheetsConfigError",
    "JoinResult",
    "submit_join_request",
]
