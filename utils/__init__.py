"""
Utility modules for the join service.
"""

from .formatting import format_yes_no, format_list, format_json
from .config import Config

__all__ = ["format_yes_no", "format_list", "format_json", "Config"]
