"""Pydantic models for testdeck configuration.

These models define the structure of config.toml and secrets.env files.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class ApiConfig(BaseModel):
    """Backend REST API configuration."""

    base_url: str = "http://localhost:8080"
    bulk_prefix: str = "/api/bulk-upload"
    timeout_seconds: float = 30.0


class ImportConfig(BaseModel):
    """Bulk import configuration."""

    allowed_extensions: list[str] = Field(default_factory=lambda: ["xlsx"])
    max_upload_mb: int = 10
    template_filename: str = "Template_Automation.xlsx"
    download_dir: Path = Field(default_factory=lambda: Path("data/templates"))

    @property
    def max_upload_bytes(self) -> int:
        """Get max upload size in bytes."""
        return self.max_upload_mb * 1024 * 1024


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class AppConfig(BaseModel):
    """Main testdeck configuration loaded from config.toml."""

    app_name: str = "testdeck"
    api: ApiConfig = Field(default_factory=ApiConfig)
    imports: ImportConfig = Field(default_factory=ImportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class SecretsConfig(BaseModel):
    """Secrets loaded from secrets.env file.

    These are sensitive values that should not be stored in config.toml.
    """

    api_token: str | None = None
