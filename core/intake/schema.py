"""
Business Intake Schema - Canonical Join Form Record

Defines the business intake record collected by the join form, the fixed
option lists it is checked against, and the validation result returned to
callers. Wire keys follow the spreadsheet column names; Python attributes
use snake_case.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final, Optional


# =============================================================================
# Enums
# =============================================================================


class BusinessType(Enum):
    """How customers reach the business."""

    PHYSICAL = "physical"
    ONLINE = "online"
    BOTH = "both"


# =============================================================================
# Constants
# =============================================================================

BUSINESS_CATEGORIES: Final[tuple[str, ...]] = (
    "Arts, Media & Creative",
    "Auto, Transport & Logistics",
    "Beauty & Personal Care",
    "Business, Marketing & Consulting",
    "Contractors, Home, & Building Services",
    "Education, Training & Nonprofits",
    "Energy & Environmental",
    "Food & Drink",
    "Government, Public & Infrastructure",
    "Health & Wellness",
    "Legal, Financial & Professional",
    "Manufacturing, Industrial & Wholesale",
    "Other / Specialty Services",
    "Shops & Retail",
    "Tech & Digital Services",
    "Travel, Hospitality & Events",
)

# US ZIP or ZIP+4
ZIP_CODE_REGEX: Final = re.compile(r"[0-9]{5}(?:-[0-9]{4})?")

PHONE_REGEX: Final = re.compile(r"[0-9]{10}")

EMAIL_REGEX: Final = re.compile(
    r"(?!\.)(?!.*\.\.)([A-Z0-9_'+\-.]*)[A-Z0-9_+-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}",
    re.IGNORECASE,
)

MAX_DESCRIPTION_LENGTH: Final[int] = 500
MAX_PRODUCTS_LENGTH: Final[int] = 300
MIN_KEYWORDS: Final[int] = 1
MAX_KEYWORDS: Final[int] = 5
MAX_ADDITIONAL_LOCATIONS: Final[int] = 5

# Wire keys that are not valid Python identifiers or differ from attributes
CATEGORY_KEY: Final = "Category"
AFRICAN_AMERICAN_KEY: Final = "African_American"
WOMEN_AMERICAN_KEY: Final = "Women-American"

REQUIRED_TEXT_FIELDS: Final[tuple[str, ...]] = (
    "business_name",
    "description",
    "products",
    "website",
    "phone",
    "email",
    "contact_first",
    "contact_last",
    "street",
    "city",
    "state",
    "zip_code",
)

BOOLEAN_FIELDS: Final[tuple[str, ...]] = (
    AFRICAN_AMERICAN_KEY,
    WOMEN_AMERICAN_KEY,
    "is_usa_based",
    "consent_marketing",
    "has_multiple_locations",
)

SOCIAL_FIELDS: Final[tuple[str, ...]] = ("facebook", "instagram", "linkedin")


# =============================================================================
# Validation Helpers
# =============================================================================


def validate_zip_code(zip_code: str) -> bool:
    """Validate US ZIP / ZIP+4 format."""
    return bool(ZIP_CODE_REGEX.fullmatch(zip_code))


def validate_phone(phone: str) -> bool:
    """Validate a phone number of exactly ten digits, no separators."""
    return bool(PHONE_REGEX.fullmatch(phone))


def validate_email(email: str) -> bool:
    """Validate email address syntax."""
    return bool(EMAIL_REGEX.fullmatch(email))


def text_length(value: str) -> int:
    """
    Length in UTF-16 code units, as counted by the browser form.

    Characters outside the Basic Multilingual Plane (most emoji) count as two.
    """
    return len(value.encode("utf-16-le")) // 2


def format_field_path(loc: tuple[Any, ...]) -> str:
    """
    Render a location tuple as a field path.

    ("additional_locations", 2, "zip_code") -> "additional_locations[2].zip_code"
    """
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path


# =============================================================================
# Additional Location
# =============================================================================


@dataclass(frozen=True)
class AdditionalLocation:
    """A further business address beyond the primary one."""

    street: str
    city: str
    state: str
    zip_code: str
    street2: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> dict:
        """
        Convert location to dictionary in schema order.

        Optional keys that were never supplied are omitted.
        """
        result: dict[str, Any] = {"street": self.street}
        if self.street2 is not None:
            result["street2"] = self.street2
        result["city"] = self.city
        result["state"] = self.state
        result["zip_code"] = self.zip_code
        if self.phone is not None:
            result["phone"] = self.phone
        if self.email is not None:
            result["email"] = self.email
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "AdditionalLocation":
        """Create AdditionalLocation from an already validated dictionary."""
        return cls(
            street=data["street"],
            city=data["city"],
            state=data["state"],
            zip_code=data["zip_code"],
            street2=data.get("street2"),
            phone=data.get("phone"),
            email=data.get("email"),
        )


# =============================================================================
# Business Intake Record
# =============================================================================


@dataclass(frozen=True)
class BusinessIntakeRecord:
    """
    A fully validated business intake submission.

    Only produced by the validator; every cross-field rule holds for an
    instance of this class. The record has no persistent identity: the
    spreadsheet row written from it is the only durable copy.
    """

    # === Identity ===
    business_name: str
    category: str
    description: str
    products: str
    website: str

    # === Contact ===
    phone: str
    email: str
    contact_first: str
    contact_last: str

    # === Primary address ===
    street: str
    city: str
    state: str
    zip_code: str

    # === Classification ===
    african_american: bool
    women_american: bool
    type_of_business: BusinessType
    is_usa_based: bool
    consent_marketing: bool

    # === Keywords and locations ===
    keywords: tuple[str, ...]
    has_multiple_locations: bool
    additional_locations: tuple[AdditionalLocation, ...] = ()

    # === Optional ===
    street2: Optional[str] = None
    tags: Optional[str] = None
    facebook: str = ""
    instagram: str = ""
    linkedin: str = ""

    @property
    def not_usa(self) -> int:
        """Inverse of is_usa_based as the 0/1 spreadsheet flag."""
        return 0 if self.is_usa_based else 1

    def to_dict(self) -> dict:
        """Convert record to dictionary keyed by wire names."""
        return {
            "business_name": self.business_name,
            CATEGORY_KEY: self.category,
            "description": self.description,
            "products": self.products,
            "website": self.website,
            "phone": self.phone,
            "email": self.email,
            "contact_first": self.contact_first,
            "contact_last": self.contact_last,
            "street": self.street,
            "street2": self.street2,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "tags": self.tags,
            AFRICAN_AMERICAN_KEY: self.african_american,
            WOMEN_AMERICAN_KEY: self.women_american,
            "type_of_business": self.type_of_business.value,
            "is_usa_based": self.is_usa_based,
            "consent_marketing": self.consent_marketing,
            "facebook": self.facebook,
            "instagram": self.instagram,
            "linkedin": self.linkedin,
            "keywords": list(self.keywords),
            "has_multiple_locations": self.has_multiple_locations,
            "additional_locations": [
                location.to_dict() for location in self.additional_locations
            ],
        }


# =============================================================================
# Validation Result
# =============================================================================


@dataclass(frozen=True)
class IntakeValidationResult:
    """
    Result of intake validation.

    field_errors maps a field path (e.g. "additional_locations[2].zip_code")
    to the messages raised against it, in the order rules were checked.
    """

    valid: bool
    field_errors: dict[str, tuple[str, ...]] = field(default_factory=dict)
    record: Optional[BusinessIntakeRecord] = None

    @property
    def is_blocked(self) -> bool:
        """Check if the submission is blocked by validation errors."""
        return not self.valid

    @property
    def error_paths(self) -> tuple[str, ...]:
        return tuple(self.field_errors)

    def errors_for(self, path: str) -> tuple[str, ...]:
        """Messages attached to a single field path."""
        return self.field_errors.get(path, ())

    def details(self) -> dict[str, list[str]]:
        """Field errors as JSON-ready lists."""
        return {path: list(messages) for path, messages in self.field_errors.items()}

    def to_dict(self) -> dict:
        """Convert result to dictionary."""
        return {
            "valid": self.valid,
            "is_blocked": self.is_blocked,
            "details": self.details(),
        }
