"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # Google Sheets
    google_service_account_json: Optional[str] = field(
        default_factory=lambda: os.getenv("GOOGLE_SERVICE_ACCOUNT_JSON")
    )
    google_sheet_id: Optional[str] = field(default_factory=lambda: os.getenv("GOOGLE_SHEET_ID"))
    google_sheet_name: str = field(
        default_factory=lambda: os.getenv("GOOGLE_SHEET_NAME", "Sheet1")
    )

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    def to_dict(self) -> dict:
        """Convert config to dictionary. Credentials are never included."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.log_level,
            "google_service_account_configured": bool(self.google_service_account_json),
            "google_sheet_id": self.google_sheet_id,
            "google_sheet_name": self.google_sheet_name,
        }
