"""
Join Payload - Server-Side Parsing of POST /api/join Bodies

The browser sends the intake form values with two differences from the
form shape: tags arrive as a list rather than a comma string, and the
derived Not_USA flag is included. This module validates those extras,
then re-validates the whole record with the tag list joined back into a
string, exactly as the form would have held it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from core.intake.form import join_tags
from core.intake.schema import BusinessIntakeRecord, format_field_path
from core.intake.validation import validate_intake_data


logger = logging.getLogger(__name__)


# =============================================================================
# Extras Schema
# =============================================================================


class JoinPayloadExtras(BaseModel):
    """Fields the transmitted payload carries beyond the form shape."""

    model_config = ConfigDict(extra="ignore")

    tags: list[StrictStr] = Field(default_factory=list)
    not_usa: StrictInt = Field(alias="Not_USA")

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, value: list[str]) -> list[str]:
        stripped = [tag.strip() for tag in value]
        if any(not tag for tag in stripped):
            raise ValueError("Tags cannot be empty")
        return stripped

    @field_validator("not_usa", mode="before")
    @classmethod
    def integral_float_flag(cls, value: Any) -> Any:
        # JSON numbers like 1.0 carry the same flag as 1
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    @field_validator("not_usa")
    @classmethod
    def check_flag(cls, value: int) -> int:
        if value not in (0, 1):
            raise ValueError("Not_USA must be 0 or 1")
        return value


def pydantic_error_details(error: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by field path, keeping wire names."""
    details: dict[str, list[str]] = {}
    for item in error.errors():
        path = format_field_path(tuple(item["loc"])) or "__root__"
        details.setdefault(path, []).append(item["msg"])
    return details


# =============================================================================
# Parsed Payload
# =============================================================================


@dataclass(frozen=True)
class JoinPayload:
    """A fully validated submission: record plus transmitted extras."""

    record: BusinessIntakeRecord
    tags: tuple[str, ...]
    not_usa: int


@dataclass(frozen=True)
class PayloadRejection:
    """Why a payload was refused, with field-path details."""

    error: str
    details: Optional[dict[str, list[str]]] = None

    def to_dict(self) -> dict:
        content: dict[str, Any] = {"error": self.error}
        if self.details is not None:
            content["details"] = self.details
        return content


INVALID_PAYLOAD_MESSAGE = "Invalid payload."


def parse_join_payload(body: Any) -> Union[JoinPayload, PayloadRejection]:
    """
    Validate a decoded JSON body and build the JoinPayload.

    Steps:
    1. Reject anything that is not a JSON object
    2. Validate the extras (tag list, Not_USA flag)
    3. Re-validate the full record with tags joined as ", "

    Not_USA is recomputed from is_usa_based; a submitted value that
    disagrees is logged and overridden.

    Args:
        body: Decoded JSON request body

    Returns:
        JoinPayload on success, PayloadRejection otherwise
    """
    if not isinstance(body, dict):
        return PayloadRejection(error=INVALID_PAYLOAD_MESSAGE)

    try:
        extras = JoinPayloadExtras.model_validate(body)
    except ValidationError as e:
        details = pydantic_error_details(e)
        logger.info("Join payload extras rejected: %s", sorted(details))
        return PayloadRejection(error=INVALID_PAYLOAD_MESSAGE, details=details)

    validation = validate_intake_data({**body, "tags": join_tags(extras.tags)})
    if validation.is_blocked:
        logger.info("Join payload failed validation: %s", list(validation.error_paths))
        return PayloadRejection(error=INVALID_PAYLOAD_MESSAGE, details=validation.details())

    record = validation.record
    if extras.not_usa != record.not_usa:
        logger.warning(
            "Submitted Not_USA=%s disagrees with is_usa_based=%s; using %s",
            extras.not_usa,
            record.is_usa_based,
            record.not_usa,
        )

    return JoinPayload(record=record, tags=tuple(extras.tags), not_usa=record.not_usa)
