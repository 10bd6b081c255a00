"""
Business Intake Module

Defines the join form's business intake record, the rules a submission
must satisfy, and the client-side packaging applied before transmission.
"""

from core.intake.schema import (
    BusinessIntakeRecord,
    AdditionalLocation,
    BusinessType,
    IntakeValidationResult,
    BUSINESS_CATEGORIES,
    MAX_KEYWORDS,
    MAX_ADDITIONAL_LOCATIONS,
)
from core.intake.validation import (
    validate_intake_data,
    validate_record,
    create_record,
)
from core.intake.form import (
    default_form_values,
    to_ten_digits,
    add_keyword,
    remove_keyword,
    sync_locations,
    split_tags,
    join_tags,
    derive_not_usa,
    build_join_payload,
)

__all__ = [
    # Schema
    "BusinessIntakeRecord",
    "AdditionalLocation",
    "BusinessType",
    "IntakeValidationResult",
    "BUSINESS_CATEGORIES",
    "MAX_KEYWORDS",
    "MAX_ADDITIONAL_LOCATIONS",
    # Validation
    "validate_intake_data",
    "validate_record",
    "create_record",
    # Form packaging
    "default_form_values",
    "to_ten_digits",
    "add_keyword",
    "remove_keyword",
    "sync_locations",
    "split_tags",
    "join_tags",
    "derive_not_usa",
    "build_join_payload",
]
