"""
Spreadsheet cell formatting utilities.
"""

import json
from typing import Any, Iterable


def format_yes_no(value: bool) -> str:
    """
    Format a boolean as a spreadsheet cell.

    Args:
        value: The flag to render.

    Returns:
        "Yes" or "No".
    """
    return "Yes" if value else "No"


def format_list(values: Iterable[str], separator: str = ", ") -> str:
    """
    Join list values into a single cell.

    Args:
        values: Strings to join, in order.
        separator: Text placed between values.

    Returns:
        Joined string, empty for an empty list.
    """
    return separator.join(values)


def format_json(value: Any) -> str:
    """Compact JSON for a structured value stored in one cell."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
