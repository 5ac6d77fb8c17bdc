"""Global settings instance for testdeck.

This module provides a unified settings object that combines:
- Configuration from config.toml
- Secrets from secrets.env
- Environment variable overrides

The settings object provides a flat interface while internally using the
structured configuration.
"""

import logging
from pathlib import Path

from testdeck.config.loader import load_config, load_secrets
from testdeck.config.schema import AppConfig, SecretsConfig

logger = logging.getLogger(__name__)


class Settings:
    """Unified settings object combining config and secrets."""

    def __init__(
        self,
        config: AppConfig | None = None,
        secrets: SecretsConfig | None = None,
    ):
        """Initialize settings.

        Args:
            config: Optional AppConfig instance. If not provided, loads from file.
            secrets: Optional SecretsConfig instance. If not provided, loads from file.
        """
        self._config = config or load_config()
        self._secrets = secrets or load_secrets()

        if not self._secrets.api_token:
            logger.debug("No API token configured; backend requests are sent unauthenticated")

    @property
    def config(self) -> AppConfig:
        """Get the full configuration object."""
        return self._config

    @property
    def secrets(self) -> SecretsConfig:
        """Get the secrets configuration object."""
        return self._secrets

    # =========================================================================
    # Flat property interface
    # =========================================================================

    @property
    def app_name(self) -> str:
        return self._config.app_name

    # API
    @property
    def api_base_url(self) -> str:
        return self._config.api.base_url

    @property
    def bulk_prefix(self) -> str:
        return self._config.api.bulk_prefix

    @property
    def api_timeout(self) -> float:
        return self._config.api.timeout_seconds

    # Imports
    @property
    def allowed_extensions(self) -> list[str]:
        return self._config.imports.allowed_extensions

    @property
    def max_upload_size_mb(self) -> int:
        return self._config.imports.max_upload_mb

    @property
    def max_upload_size_bytes(self) -> int:
        return self._config.imports.max_upload_bytes

    @property
    def template_filename(self) -> str:
        return self._config.imports.template_filename

    @property
    def download_dir(self) -> Path:
        return self._config.imports.download_dir

    # Logging
    @property
    def log_level(self) -> str:
        return self._config.logging.level

    # Secrets
    @property
    def api_token(self) -> str | None:
        return self._secrets.api_token


# Global settings instance - lazily initialized
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    The settings are loaded once and cached for subsequent calls.

    Returns:
        The global Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance.

    This is primarily useful for testing to reload configuration.
    """
    global _settings
    _settings = None


class _SettingsProxy:
    """Proxy object that lazily loads settings on first access."""

    def __getattr__(self, name: str):
        return getattr(get_settings(), name)

    def __repr__(self) -> str:
        return repr(get_settings())


settings = _SettingsProxy()
