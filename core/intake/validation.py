"""
Intake Validation - Join Form Rules and Field Errors

Implements the rule table for business intake submissions. Every rule is
checked and every violation is reported against its field path, so the
form can show all problems at once. Cross-field rules run whenever the
fields they read are well-typed, regardless of failures elsewhere.

The same rules serve the join page (validate-only endpoint) and the
submission handler's server-side re-validation.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from core.intake.schema import (
    AFRICAN_AMERICAN_KEY,
    BUSINESS_CATEGORIES,
    CATEGORY_KEY,
    MAX_ADDITIONAL_LOCATIONS,
    MAX_DESCRIPTION_LENGTH,
    MAX_KEYWORDS,
    MAX_PRODUCTS_LENGTH,
    MIN_KEYWORDS,
    SOCIAL_FIELDS,
    WOMEN_AMERICAN_KEY,
    AdditionalLocation,
    BusinessIntakeRecord,
    BusinessType,
    IntakeValidationResult,
    format_field_path,
    text_length,
    validate_email,
    validate_phone,
    validate_zip_code,
)


_URL_ADAPTER = TypeAdapter(AnyUrl)

REQUIRED_MESSAGE = "Required"
EXPECTED_STRING_MESSAGE = "Expected string"
EXPECTED_BOOLEAN_MESSAGE = "Expected boolean"
EXPECTED_ARRAY_MESSAGE = "Expected array"
EXPECTED_OBJECT_MESSAGE = "Expected object"


def is_valid_url(value: str) -> bool:
    """Check that value parses as an absolute URL with a scheme."""
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


# =============================================================================
# Error Collection
# =============================================================================


class _FieldErrors:
    """Ordered field path -> messages accumulator."""

    def __init__(self) -> None:
        self._errors: dict[str, list[str]] = {}

    def add(self, loc: tuple[Any, ...], message: str) -> None:
        self._errors.setdefault(format_field_path(loc), []).append(message)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def count(self) -> int:
        return sum(len(messages) for messages in self._errors.values())

    def freeze(self) -> dict[str, tuple[str, ...]]:
        return {path: tuple(messages) for path, messages in self._errors.items()}


def _text(
    data: dict,
    key: str,
    loc: tuple[Any, ...],
    errors: _FieldErrors,
    empty_message: str,
    max_length: Optional[int] = None,
    max_message: str = "",
) -> Optional[str]:
    """Required string with a minimum length of one and optional maximum."""
    value = data.get(key)
    path = loc + (key,)
    if value is None:
        errors.add(path, REQUIRED_MESSAGE)
        return None
    if not isinstance(value, str):
        errors.add(path, EXPECTED_STRING_MESSAGE)
        return None
    ok = True
    if text_length(value) < 1:
        errors.add(path, empty_message)
        ok = False
    if max_length is not None and text_length(value) > max_length:
        errors.add(path, max_message)
        ok = False
    return value if ok else None


def _optional_text(
    data: dict, key: str, loc: tuple[Any, ...], errors: _FieldErrors
) -> tuple[bool, Optional[str]]:
    value = data.get(key)
    if value is None:
        return True, None
    if not isinstance(value, str):
        errors.add(loc + (key,), EXPECTED_STRING_MESSAGE)
        return False, None
    return True, value


def _boolean(data: dict, key: str, errors: _FieldErrors) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        errors.add((key,), REQUIRED_MESSAGE)
        return None
    if not isinstance(value, bool):
        errors.add((key,), EXPECTED_BOOLEAN_MESSAGE)
        return None
    return value


def _pattern(
    data: dict,
    key: str,
    loc: tuple[Any, ...],
    errors: _FieldErrors,
    check,
    message: str,
) -> Optional[str]:
    """Required string that must satisfy check()."""
    value = data.get(key)
    path = loc + (key,)
    if value is None:
        errors.add(path, REQUIRED_MESSAGE)
        return None
    if not isinstance(value, str):
        errors.add(path, EXPECTED_STRING_MESSAGE)
        return None
    if not check(value):
        errors.add(path, message)
        return None
    return value


def _blank_or(
    data: dict,
    key: str,
    loc: tuple[Any, ...],
    errors: _FieldErrors,
    check,
    message: str,
) -> tuple[bool, Optional[str]]:
    """Optional string that is either empty or satisfies check()."""
    ok, value = _optional_text(data, key, loc, errors)
    if not ok or value is None or value == "":
        return ok, value
    if not check(value):
        errors.add(loc + (key,), message)
        return False, None
    return True, value


# =============================================================================
# Location Validation
# =============================================================================


def _validate_location(
    item: Any, index: int, errors: _FieldErrors
) -> Optional[AdditionalLocation]:
    loc = ("additional_locations", index)
    if not isinstance(item, dict):
        errors.add(loc, EXPECTED_OBJECT_MESSAGE)
        return None

    start = errors.count()
    street = _text(item, "street", loc, errors, "Address line 1 is required")
    _, street2 = _optional_text(item, "street2", loc, errors)
    city = _text(item, "city", loc, errors, "City is required")
    state = _text(item, "state", loc, errors, "State is required")
    zip_code = _pattern(
        item, "zip_code", loc, errors, validate_zip_code, "Enter a valid ZIP code"
    )
    _, phone = _blank_or(
        item, "phone", loc, errors, validate_phone, "Phone must be 10 digits"
    )
    _, email = _blank_or(
        item, "email", loc, errors, validate_email, "Invalid email"
    )

    if errors.count() != start:
        return None
    return AdditionalLocation(
        street=street,
        street2=street2,
        city=city,
        state=state,
        zip_code=zip_code,
        phone=phone,
        email=email,
    )


# =============================================================================
# Validation Functions
# =============================================================================


def validate_intake_data(data: Any) -> IntakeValidationResult:
    """
    Validate raw intake data and build the record when every rule holds.

    Args:
        data: Candidate record as decoded from JSON (possibly partial or
            malformed)

    Returns:
        IntakeValidationResult with field-path errors, and the accepted
        BusinessIntakeRecord when valid
    """
    errors = _FieldErrors()

    if not isinstance(data, dict):
        errors.add(("__root__",), EXPECTED_OBJECT_MESSAGE)
        return IntakeValidationResult(valid=False, field_errors=errors.freeze())

    # === Identity ===
    business_name = _text(
        data, "business_name", (), errors, "Business name is required"
    )

    category = data.get(CATEGORY_KEY)
    if category is None:
        errors.add((CATEGORY_KEY,), REQUIRED_MESSAGE)
    elif category not in BUSINESS_CATEGORIES:
        errors.add((CATEGORY_KEY,), "Select a valid business category")
        category = None

    description = _text(
        data,
        "description",
        (),
        errors,
        "Business description is required",
        MAX_DESCRIPTION_LENGTH,
        "Description must be 500 characters or fewer",
    )
    products = _text(
        data,
        "products",
        (),
        errors,
        "Products/services are required",
        MAX_PRODUCTS_LENGTH,
        "Products/services must be 300 characters or fewer",
    )
    website = _pattern(
        data, "website", (), errors, is_valid_url, "Enter a valid website URL"
    )

    # === Contact ===
    phone = _pattern(
        data, "phone", (), errors, validate_phone, "Phone must be exactly 10 digits"
    )
    email = _pattern(
        data, "email", (), errors, validate_email, "Enter a valid email address"
    )
    contact_first = _text(data, "contact_first", (), errors, "First name is required")
    contact_last = _text(data, "contact_last", (), errors, "Last name is required")

    # === Primary address ===
    street = _text(data, "street", (), errors, "Address line 1 is required")
    _, street2 = _optional_text(data, "street2", (), errors)
    city = _text(data, "city", (), errors, "City is required")
    state = _text(data, "state", (), errors, "State is required")
    zip_code = _pattern(
        data, "zip_code", (), errors, validate_zip_code, "Enter a valid ZIP code"
    )
    _, tags = _optional_text(data, "tags", (), errors)

    # === Classification ===
    african_american = _boolean(data, AFRICAN_AMERICAN_KEY, errors)
    women_american = _boolean(data, WOMEN_AMERICAN_KEY, errors)

    business_type: Optional[BusinessType] = None
    raw_type = data.get("type_of_business")
    if raw_type is None:
        errors.add(("type_of_business",), REQUIRED_MESSAGE)
    else:
        try:
            business_type = BusinessType(raw_type)
        except ValueError:
            errors.add(("type_of_business",), "Select physical, online, or both")

    is_usa_based = _boolean(data, "is_usa_based", errors)
    consent_marketing = _boolean(data, "consent_marketing", errors)
    if consent_marketing is False:
        errors.add(("consent_marketing",), "Marketing consent is required")

    # === Socials (absent counts as empty) ===
    socials: dict[str, str] = {}
    for key in SOCIAL_FIELDS:
        _, value = _blank_or(data, key, (), errors, is_valid_url, "Invalid URL")
        socials[key] = value or ""

    # === Keywords ===
    keywords: list[str] = []
    raw_keywords = data.get("keywords")
    if raw_keywords is None:
        errors.add(("keywords",), REQUIRED_MESSAGE)
    elif not isinstance(raw_keywords, list):
        errors.add(("keywords",), EXPECTED_ARRAY_MESSAGE)
    else:
        for index, keyword in enumerate(raw_keywords):
            if not isinstance(keyword, str):
                errors.add(("keywords", index), EXPECTED_STRING_MESSAGE)
                continue
            trimmed = keyword.strip()
            if not trimmed:
                errors.add(("keywords", index), "Keyword is required")
                continue
            keywords.append(trimmed)
        if len(raw_keywords) < MIN_KEYWORDS:
            errors.add(("keywords",), "Add at least one keyword")
        if len(raw_keywords) > MAX_KEYWORDS:
            errors.add(("keywords",), "Maximum 5 keywords")

    # === Locations ===
    has_multiple_locations = _boolean(data, "has_multiple_locations", errors)

    locations: list[AdditionalLocation] = []
    location_count: Optional[int] = None
    raw_locations = data.get("additional_locations")
    if raw_locations is None:
        errors.add(("additional_locations",), REQUIRED_MESSAGE)
    elif not isinstance(raw_locations, list):
        errors.add(("additional_locations",), EXPECTED_ARRAY_MESSAGE)
    else:
        location_count = len(raw_locations)
        for index, item in enumerate(raw_locations):
            location = _validate_location(item, index, errors)
            if location is not None:
                locations.append(location)
        if location_count > MAX_ADDITIONAL_LOCATIONS:
            errors.add(("additional_locations",), "Maximum 5 locations")

    # === Cross-field rules ===
    if african_american is False and women_american is False:
        errors.add((AFRICAN_AMERICAN_KEY,), "Select at least one ownership option")

    if has_multiple_locations is True and location_count == 0:
        errors.add(("additional_locations",), "Add at least one additional location")

    if errors:
        return IntakeValidationResult(valid=False, field_errors=errors.freeze())

    record = BusinessIntakeRecord(
        business_name=business_name,
        category=category,
        description=description,
        products=products,
        website=website,
        phone=phone,
        email=email,
        contact_first=contact_first,
        contact_last=contact_last,
        street=street,
        street2=street2,
        city=city,
        state=state,
        zip_code=zip_code,
        tags=tags,
        african_american=african_american,
        women_american=women_american,
        type_of_business=business_type,
        is_usa_based=is_usa_based,
        consent_marketing=consent_marketing,
        facebook=socials["facebook"],
        instagram=socials["instagram"],
        linkedin=socials["linkedin"],
        keywords=tuple(keywords),
        has_multiple_locations=has_multiple_locations,
        additional_locations=tuple(locations),
    )
    return IntakeValidationResult(valid=True, record=record)


def validate_record(record: BusinessIntakeRecord) -> IntakeValidationResult:
    """
    Validate an existing BusinessIntakeRecord instance.

    Args:
        record: BusinessIntakeRecord to validate

    Returns:
        IntakeValidationResult with validation outcome
    """
    return validate_intake_data(record.to_dict())


# =============================================================================
# Record Creation
# =============================================================================


def create_record(
    data: Any,
) -> tuple[Optional[BusinessIntakeRecord], IntakeValidationResult]:
    """
    Create a BusinessIntakeRecord from raw data with validation.

    Args:
        data: Raw intake data dictionary

    Returns:
        Tuple of (BusinessIntakeRecord or None, IntakeValidationResult)
    """
    validation = validate_intake_data(data)
    return validation.record, validation
