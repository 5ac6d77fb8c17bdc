"""Configuration loader for testdeck.

Loads configuration from TOML files and secrets from .env files.
Environment variables can override any configuration value.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from testdeck.config.schema import AppConfig, SecretsConfig

logger = logging.getLogger(__name__)


def get_config_search_paths() -> list[Path]:
    """Get the list of paths to search for configuration files.

    Returns paths in priority order (first found wins):
    1. ./config.toml (project root - for development)
    2. ~/.config/testdeck/config.toml (user config)
    3. /etc/testdeck/config.toml (system config)
    """
    return [
        Path.cwd() / "config.toml",
        Path.home() / ".config" / "testdeck" / "config.toml",
        Path("/etc/testdeck/config.toml"),
    ]


def get_secrets_search_paths() -> list[Path]:
    """Get the list of paths to search for secrets files.

    Returns paths in priority order (first found wins):
    1. ./secrets.env (project root - for development)
    2. ~/.config/testdeck/secrets.env (user secrets)
    3. /etc/testdeck/secrets.env (system secrets)
    """
    return [
        Path.cwd() / "secrets.env",
        Path.home() / ".config" / "testdeck" / "secrets.env",
        Path("/etc/testdeck/secrets.env"),
    ]


def find_config_file() -> Path | None:
    """Find the first existing config file from search paths."""
    for path in get_config_search_paths():
        if path.exists() and path.is_file():
            logger.debug("Found config file: %s", path)
            return path
    return None


def find_secrets_file() -> Path | None:
    """Find the first existing secrets file from search paths."""
    for path in get_secrets_search_paths():
        if path.exists() and path.is_file():
            logger.debug("Found secrets file: %s", path)
            return path
    return None


def load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def parse_env_file(path: Path) -> dict[str, str]:
    """Parse a simple .env file into a dictionary.

    Supports:
    - KEY=value
    - KEY="quoted value"
    - # comments
    - Empty lines
    """
    env_vars: dict[str, str] = {}

    with open(path) as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip()

            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            env_vars[key] = value

    return env_vars


def apply_env_overrides(config_dict: dict[str, Any], prefix: str = "TESTDECK") -> None:
    """Apply environment variable overrides to configuration dictionary.

    Environment variables are mapped as follows:
    - TESTDECK_API_BASE_URL -> config_dict["api"]["base_url"]
    - TESTDECK_IMPORTS_MAX_UPLOAD_MB -> config_dict["imports"]["max_upload_mb"]
    - etc.

    Note: This modifies config_dict in place.
    """
    env_mappings = {
        # API
        f"{prefix}_API_BASE_URL": ("api", "base_url"),
        f"{prefix}_API_BULK_PREFIX": ("api", "bulk_prefix"),
        f"{prefix}_API_TIMEOUT": ("api", "timeout_seconds"),
        f"{prefix}_BASE_URL": ("api", "base_url"),  # Shorthand
        # Imports
        f"{prefix}_IMPORTS_MAX_UPLOAD_MB": ("imports", "max_upload_mb"),
        f"{prefix}_IMPORTS_TEMPLATE_FILENAME": ("imports", "template_filename"),
        f"{prefix}_IMPORTS_DOWNLOAD_DIR": ("imports", "download_dir"),
        f"{prefix}_IMPORTS_ALLOWED_EXTENSIONS": ("imports", "allowed_extensions"),
        # Logging
        f"{prefix}_LOG_LEVEL": ("logging", "level"),
    }

    for env_var, path in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            section, key = path

            if section not in config_dict:
                config_dict[section] = {}

            if key == "max_upload_mb":
                config_dict[section][key] = int(value)
            elif key == "timeout_seconds":
                config_dict[section][key] = float(value)
            elif key == "allowed_extensions":
                config_dict[section][key] = [
                    ext.strip().lstrip(".").lower() for ext in value.split(",") if ext.strip()
                ]
            elif key == "level":
                config_dict[section][key] = value.upper()
            else:
                config_dict[section][key] = value


def load_secrets(secrets_file: Path | None = None) -> SecretsConfig:
    """Load secrets from environment variables and optional secrets.env file.

    Environment variables take precedence over file values.
    """
    secrets_dict: dict[str, str | None] = {}
    key_mapping = {
        "TESTDECK_API_TOKEN": "api_token",
    }

    if secrets_file is None:
        secrets_file = find_secrets_file()

    if secrets_file and secrets_file.exists():
        logger.info("Loading secrets from: %s", secrets_file)
        file_secrets = parse_env_file(secrets_file)
        for file_key, config_key in key_mapping.items():
            if file_key in file_secrets:
                secrets_dict[config_key] = file_secrets[file_key]

    for env_var, config_key in key_mapping.items():
        value = os.environ.get(env_var)
        if value:
            secrets_dict[config_key] = value

    return SecretsConfig(**secrets_dict)


def load_config(config_file: Path | None = None) -> AppConfig:
    """Load configuration from TOML file with environment variable overrides.

    Args:
        config_file: Optional path to config file. If not provided,
                     searches default locations.

    Returns:
        AppConfig instance with all settings loaded.
    """
    config_dict: dict[str, Any] = {}

    if config_file is None:
        config_file = find_config_file()

    if config_file and config_file.exists():
        logger.info("Loading config from: %s", config_file)
        config_dict = load_toml_file(config_file)
    else:
        logger.info("No config file found, using defaults with env overrides")

    apply_env_overrides(config_dict)

    return AppConfig(**config_dict)
