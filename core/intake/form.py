"""
Join Form Packaging - Client-Side Form Behaviour

Pure functions for the behaviour the join page applies before anything
reaches the server: default values, phone sanitising, the editable keyword
list, clearing locations when the multi-location flag is switched off, and
packaging the values into the transmitted payload. The page script in
web/static/join.js follows these functions step for step.
"""

from __future__ import annotations

import copy
import re
from typing import Any, Final, Optional

from core.intake.schema import BUSINESS_CATEGORIES, CATEGORY_KEY, MAX_KEYWORDS


NON_DIGIT_REGEX: Final = re.compile(r"[^0-9]")

PHONE_DIGITS: Final[int] = 10

DEFAULT_FORM_VALUES: Final[dict[str, Any]] = {
    "business_name": "",
    CATEGORY_KEY: BUSINESS_CATEGORIES[0],
    "description": "",
    "products": "",
    "website": "",
    "phone": "",
    "email": "",
    "contact_first": "",
    "contact_last": "",
    "street": "",
    "street2": "",
    "city": "",
    "state": "",
    "zip_code": "",
    "tags": "",
    "African_American": False,
    "Women-American": False,
    "type_of_business": "physical",
    "is_usa_based": True,
    "consent_marketing": True,
    "facebook": "",
    "instagram": "",
    "linkedin": "",
    "keywords": [],
    "has_multiple_locations": False,
    "additional_locations": [],
}

EMPTY_LOCATION: Final[dict[str, str]] = {
    "street": "",
    "street2": "",
    "city": "",
    "state": "",
    "zip_code": "",
    "phone": "",
    "email": "",
}


def default_form_values() -> dict[str, Any]:
    """Fresh form state for a new session or after a successful submit."""
    return copy.deepcopy(DEFAULT_FORM_VALUES)


def to_ten_digits(value: str) -> str:
    """Keep only digits, truncated to ten. "(555) 123-4567 ext" -> "5551234567"."""
    return NON_DIGIT_REGEX.sub("", value)[:PHONE_DIGITS]


# =============================================================================
# Keywords
# =============================================================================


def add_keyword(keywords: list[str]) -> list[str]:
    """Append an empty keyword slot unless the list is already full."""
    if len(keywords) >= MAX_KEYWORDS:
        return list(keywords)
    return [*keywords, ""]


def remove_keyword(keywords: list[str], index: int) -> list[str]:
    """Remove the keyword at index, keeping the order of the rest."""
    return [keyword for i, keyword in enumerate(keywords) if i != index]


# =============================================================================
# Locations
# =============================================================================


def add_location(locations: list[dict]) -> list[dict]:
    """Append a blank additional location."""
    return [*locations, dict(EMPTY_LOCATION)]


def remove_location(locations: list[dict], index: int) -> list[dict]:
    return [location for i, location in enumerate(locations) if i != index]


def sync_locations(values: dict[str, Any]) -> dict[str, Any]:
    """Clear additional locations whenever the multi-location flag is off."""
    if values.get("has_multiple_locations"):
        return values
    synced = dict(values)
    synced["additional_locations"] = []
    return synced


# =============================================================================
# Payload
# =============================================================================


def split_tags(tags: Optional[str]) -> list[str]:
    """Split a comma-separated tag string into trimmed, non-empty tags."""
    return [tag.strip() for tag in (tags or "").split(",") if tag.strip()]


def join_tags(tags: list[str]) -> str:
    """Inverse of split_tags for already trimmed tags."""
    return ", ".join(tags)


def derive_not_usa(is_usa_based: bool) -> int:
    """The Not_USA spreadsheet flag: 0 when USA based, 1 otherwise."""
    return 0 if is_usa_based else 1


def build_join_payload(values: dict[str, Any]) -> dict[str, Any]:
    """
    Package validated form values for POST /api/join.

    The tag string becomes a list and the derived Not_USA flag is added;
    everything else is sent as entered.

    Args:
        values: Form values that passed validation

    Returns:
        JSON-ready payload dictionary
    """
    payload = copy.deepcopy(values)
    payload["tags"] = split_tags(values.get("tags"))
    payload["Not_USA"] = derive_not_usa(bool(values.get("is_usa_based")))
    return payload
