"""
Configuration management for Daybook.

Loads settings from an optional JSON file and environment variables.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any


@dataclass
class Config:
    """Application configuration."""

    # Database
    database_path: str = "data/daybook.db"

    # Timezone used to decide what "today" is (None = system local)
    timezone: Optional[str] = None

    # Entries
    default_category: str = "General"
    page_size: int = 10

    # Export
    export_dir: str = "data/exports"
    pdf_title: str = "Journal Export"

    @classmethod
    def _load_json(cls, json_path: Path) -> Dict[str, Any]:
        """Load JSON configuration file."""
        if not json_path.exists():
            raise FileNotFoundError(f"Config file not found: {json_path}")

        with open(json_path, 'r') as f:
            return json.load(f)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from an optional JSON settings file + environment variables."""
        settings: Dict[str, Any] = {}

        settings_file = os.getenv("DAYBOOK_SETTINGS")
        if settings_file:
            settings = cls._load_json(Path(settings_file))

        page_size = os.getenv("DAYBOOK_PAGE_SIZE", settings.get("page_size", 10))

        return cls(
            database_path=os.getenv(
                "DAYBOOK_DB_PATH", settings.get("database_path", "data/daybook.db")
            ),
            timezone=os.getenv("TIMEZONE", settings.get("timezone")) or None,
            default_category=os.getenv(
                "DAYBOOK_DEFAULT_CATEGORY", settings.get("default_category", "General")
            ),
            page_size=int(page_size),
            export_dir=os.getenv(
                "DAYBOOK_EXPORT_DIR", settings.get("export_dir", "data/exports")
            ),
            pdf_title=os.getenv(
                "DAYBOOK_PDF_TITLE", settings.get("pdf_title", "Journal Export")
            ),
        )

    def summary(self) -> str:
        """Get a summary of current settings."""
        return f"""Database: {self.database_path}
Timezone: {self.timezone or "system local"}

Entries:
  Default Category: {self.default_category}
  Page Size: {self.page_size}

Export:
  Directory: {self.export_dir}
  PDF Title: {self.pdf_title}
"""
