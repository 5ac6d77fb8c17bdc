"""testdeck configuration module.

This module provides TOML-based configuration with environment variable overrides.

Configuration is loaded from the following locations (in order of priority):
1. Environment variables (highest priority)
2. ./config.toml (project root - for development)
3. ~/.config/testdeck/config.toml (user config)
4. /etc/testdeck/config.toml (system config)

Secrets are loaded from secrets.env files in the same directories.
"""

from testdeck.config.schema import (
    ApiConfig,
    AppConfig,
    ImportConfig,
    LoggingConfig,
    SecretsConfig,
)
from testdeck.config.settings import Settings, get_settings, reset_settings, settings

__all__ = [
    "ApiConfig",
    "AppConfig",
    "ImportConfig",
    "LoggingConfig",
    "SecretsConfig",
    "Settings",
    "get_settings",
    "reset_settings",
    "settings",
]
