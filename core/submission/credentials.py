"""
Service Account Credentials - Decoding the Environment Blob

GOOGLE_SERVICE_ACCOUNT_JSON holds the service-account key either as raw
JSON or as base64-encoded JSON. Hosting dashboards often store the private
key with escaped newlines, so literal "\\n" sequences are restored.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Optional


class SheetsConfigError(RuntimeError):
    """Raised when spreadsheet credentials or settings are missing or unusable."""

    pass


def load_service_account_info(raw: Optional[str]) -> dict[str, Any]:
    """
    Decode service-account info from the environment value.

    Args:
        raw: Value of GOOGLE_SERVICE_ACCOUNT_JSON (JSON or base64 JSON)

    Returns:
        Service-account info dictionary with a usable private_key

    Raises:
        SheetsConfigError: If the value is missing, not base64, or not JSON
    """
    if not raw:
        raise SheetsConfigError("Missing GOOGLE_SERVICE_ACCOUNT_JSON environment variable.")

    if raw.strip().startswith("{"):
        json_string = raw
    else:
        try:
            json_string = base64.b64decode(raw.strip()).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise SheetsConfigError("GOOGLE_SERVICE_ACCOUNT_JSON is not valid base64.") from e

    try:
        info = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise SheetsConfigError("GOOGLE_SERVICE_ACCOUNT_JSON is not valid JSON.") from e

    if not isinstance(info, dict):
        raise SheetsConfigError("GOOGLE_SERVICE_ACCOUNT_JSON is not valid JSON.")

    private_key = info.get("private_key")
    if isinstance(private_key, str):
        info["private_key"] = private_key.replace("\\n", "\n")
    return info
