"""
Row Mapping - Spreadsheet Layout for Join Submissions

Every submission becomes one row of display strings in a fixed column
order. The header row written on first use is HEADER_COLUMNS verbatim.
"""

from __future__ import annotations

from typing import Final

from core.submission.payload import JoinPayload
from utils.formatting import format_json, format_list, format_yes_no


HEADER_COLUMNS: Final[tuple[str, ...]] = (
    "business_name",
    "Category",
    "description",
    "products",
    "website",
    "phone",
    "email",
    "contact_first",
    "contact_last",
    "street",
    "street2",
    "city",
    "state",
    "zip_code",
    "tags",
    "African_American",
    "Women-American",
    "type_of_business",
    "is_usa_based",
    "Not_USA",
    "consent_marketing",
    "facebook",
    "instagram",
    "linkedin",
    "keywords",
    "has_multiple_locations",
    "additional_locations",
)


def row_from_payload(payload: JoinPayload) -> list[str]:
    """
    Map a validated payload onto HEADER_COLUMNS.

    Args:
        payload: Validated JoinPayload

    Returns:
        One string per column, in header order
    """
    record = payload.record
    return [
        record.business_name,
        record.category,
        record.description,
        record.products,
        record.website,
        record.phone,
        record.email,
        record.contact_first,
        record.contact_last,
        record.street,
        record.street2 or "",
        record.city,
        record.state,
        record.zip_code,
        format_list(payload.tags),
        format_yes_no(record.african_american),
        format_yes_no(record.women_american),
        record.type_of_business.value,
        format_yes_no(record.is_usa_based),
        str(payload.not_usa),
        format_yes_no(record.consent_marketing),
        record.facebook,
        record.instagram,
        record.linkedin,
        format_list(record.keywords),
        format_yes_no(record.has_multiple_locations),
        format_json([location.to_dict() for location in record.additional_locations]),
    ]
