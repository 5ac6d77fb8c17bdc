"""Tests for the testdeck configuration system."""

import os
from pathlib import Path
from unittest.mock import patch

from testdeck.config.loader import (
    apply_env_overrides,
    find_config_file,
    find_secrets_file,
    get_config_search_paths,
    get_secrets_search_paths,
    load_config,
    load_secrets,
    load_toml_file,
    parse_env_file,
)
from testdeck.config.schema import (
    ApiConfig,
    AppConfig,
    ImportConfig,
    LoggingConfig,
    SecretsConfig,
)
from testdeck.config.settings import Settings, get_settings, reset_settings, settings as settings_proxy


class TestSchemaDefaults:
    """Test default values in schema models."""

    def test_api_config_defaults(self):
        config = ApiConfig()
        assert config.base_url == "http://localhost:8080"
        assert config.bulk_prefix == "/api/bulk-upload"
        assert config.timeout_seconds == 30.0

    def test_import_config_defaults(self):
        """Test ImportConfig has correct defaults."""
        config = ImportConfig()
        assert config.allowed_extensions == ["xlsx"]
        assert config.max_upload_mb == 10
        assert config.max_upload_bytes == 10 * 1024 * 1024
        assert config.template_filename == "Template_Automation.xlsx"
        assert config.download_dir == Path("data/templates")

    def test_app_config_defaults(self):
        config = AppConfig()
        assert config.app_name == "testdeck"
        assert isinstance(config.api, ApiConfig)
        assert isinstance(config.imports, ImportConfig)
        assert isinstance(config.logging, LoggingConfig)
        assert config.logging.level == "INFO"

    def test_secrets_config_defaults(self):
        assert SecretsConfig().api_token is None


class TestConfigSearchPaths:
    """Test configuration file search paths."""

    def test_config_search_paths_order(self):
        """Test config search paths are in correct priority order."""
        paths = get_config_search_paths()
        assert len(paths) == 3
        assert paths[0] == Path.cwd() / "config.toml"
        assert paths[1] == Path.home() / ".config" / "testdeck" / "config.toml"
        assert paths[2] == Path("/etc/testdeck/config.toml")

    def test_secrets_search_paths_order(self):
        paths = get_secrets_search_paths()
        assert len(paths) == 3
        assert paths[0] == Path.cwd() / "secrets.env"
        assert paths[1] == Path.home() / ".config" / "testdeck" / "secrets.env"
        assert paths[2] == Path("/etc/testdeck/secrets.env")


class TestTomlLoading:
    """Test TOML file loading."""

    def test_load_toml_file(self, tmp_path):
        toml_content = """
app_name = "qa-import"

[api]
base_url = "https://qa.example.com"
timeout_seconds = 12.5

[imports]
max_upload_mb = 4
"""
        config_file = tmp_path / "config.toml"
        config_file.write_text(toml_content)

        data = load_toml_file(config_file)
        assert data["app_name"] == "qa-import"
        assert data["api"]["base_url"] == "https://qa.example.com"
        assert data["api"]["timeout_seconds"] == 12.5
        assert data["imports"]["max_upload_mb"] == 4

    def test_load_config_from_file(self, tmp_path):
        """Test load_config with a specific file."""
        toml_content = """
[api]
bulk_prefix = "/v2/bulk"

[imports]
allowed_extensions = ["xlsx", "csv"]
download_dir = "templates"

[logging]
level = "DEBUG"
"""
        config_file = tmp_path / "config.toml"
        config_file.write_text(toml_content)

        config = load_config(config_file)
        assert config.api.bulk_prefix == "/v2/bulk"
        assert config.imports.allowed_extensions == ["xlsx", "csv"]
        assert config.imports.download_dir == Path("templates")
        assert config.logging.level == "DEBUG"
        # Defaults should still apply
        assert config.api.base_url == "http://localhost:8080"
        assert config.imports.max_upload_mb == 10

    def test_load_config_without_file_uses_defaults(self):
        config = load_config()
        assert config == AppConfig()


class TestEnvFileParsing:
    """Test .env file parsing."""

    def test_parse_simple_env_file(self, tmp_path):
        env_file = tmp_path / "secrets.env"
        env_file.write_text("TESTDECK_API_TOKEN=tok-123\nOTHER=value\n")

        result = parse_env_file(env_file)
        assert result["TESTDECK_API_TOKEN"] == "tok-123"
        assert result["OTHER"] == "value"

    def test_parse_env_file_with_quotes(self, tmp_path):
        """Test parsing .env file with quoted values."""
        env_content = '''
KEY1="double quoted value"
KEY2='single quoted value'
KEY3=unquoted value
'''
        env_file = tmp_path / "test.env"
        env_file.write_text(env_content)

        result = parse_env_file(env_file)
        assert result["KEY1"] == "double quoted value"
        assert result["KEY2"] == "single quoted value"
        assert result["KEY3"] == "unquoted value"

    def test_parse_env_file_skips_comments_and_blank_lines(self, tmp_path):
        env_content = """
# This is a comment
KEY1=value1

NOT_AN_ASSIGNMENT
KEY2=value2
"""
        env_file = tmp_path / "test.env"
        env_file.write_text(env_content)

        result = parse_env_file(env_file)
        assert result == {"KEY1": "value1", "KEY2": "value2"}


class TestEnvOverrides:
    """Test environment variable overrides."""

    def test_apply_api_overrides(self):
        config_dict = {}

        with patch.dict(
            os.environ,
            {
                "TESTDECK_API_BASE_URL": "https://backend.example.com",
                "TESTDECK_API_BULK_PREFIX": "/bulk",
                "TESTDECK_API_TIMEOUT": "7.5",
            },
        ):
            apply_env_overrides(config_dict)

        assert config_dict["api"] == {
            "base_url": "https://backend.example.com",
            "bulk_prefix": "/bulk",
            "timeout_seconds": 7.5,
        }

    def test_base_url_shorthand(self):
        config_dict = {}

        with patch.dict(os.environ, {"TESTDECK_BASE_URL": "http://short.test"}):
            apply_env_overrides(config_dict)

        assert config_dict["api"]["base_url"] == "http://short.test"

    def test_apply_import_overrides(self):
        config_dict = {"imports": {"template_filename": "kept.xlsx"}}

        with patch.dict(
            os.environ,
            {
                "TESTDECK_IMPORTS_MAX_UPLOAD_MB": "25",
                "TESTDECK_IMPORTS_ALLOWED_EXTENSIONS": ".XLSX, csv,",
            },
        ):
            apply_env_overrides(config_dict)

        assert config_dict["imports"]["max_upload_mb"] == 25
        assert config_dict["imports"]["allowed_extensions"] == ["xlsx", "csv"]
        assert config_dict["imports"]["template_filename"] == "kept.xlsx"

    def test_log_level_is_upper_cased(self):
        config_dict = {}

        with patch.dict(os.environ, {"TESTDECK_LOG_LEVEL": "debug"}):
            apply_env_overrides(config_dict)

        assert config_dict["logging"]["level"] == "DEBUG"

    def test_env_overrides_file_values(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text('[api]\nbase_url = "http://from-file"\n')

        with patch.dict(os.environ, {"TESTDECK_API_BASE_URL": "http://from-env"}):
            config = load_config(config_file)

        assert config.api.base_url == "http://from-env"


class TestSecretsLoading:
    """Test secrets loading."""

    def test_load_secrets_from_file(self, tmp_path):
        secrets_file = tmp_path / "secrets.env"
        secrets_file.write_text("TESTDECK_API_TOKEN=file-token\n")

        secrets = load_secrets(secrets_file)
        assert secrets.api_token == "file-token"

    def test_load_secrets_env_override(self, tmp_path):
        """Test environment variables override file secrets."""
        secrets_file = tmp_path / "secrets.env"
        secrets_file.write_text("TESTDECK_API_TOKEN=file-token\n")

        with patch.dict(os.environ, {"TESTDECK_API_TOKEN": "env-token"}):
            secrets = load_secrets(secrets_file)

        assert secrets.api_token == "env-token"

    def test_load_secrets_missing_file(self, tmp_path):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("TESTDECK_API_TOKEN", None)
            secrets = load_secrets(tmp_path / "nonexistent.env")

        assert secrets.api_token is None


class TestSettings:
    """Test the Settings class."""

    def test_settings_property_accessors(self):
        config = AppConfig(
            app_name="qa",
            api=ApiConfig(base_url="https://qa.test", bulk_prefix="/bulk", timeout_seconds=3),
            imports=ImportConfig(max_upload_mb=2, allowed_extensions=["xlsx", "csv"]),
            logging=LoggingConfig(level="WARNING"),
        )
        settings = Settings(config=config, secrets=SecretsConfig(api_token="tok"))

        assert settings.app_name == "qa"
        assert settings.api_base_url == "https://qa.test"
        assert settings.bulk_prefix == "/bulk"
        assert settings.api_timeout == 3
        assert settings.allowed_extensions == ["xlsx", "csv"]
        assert settings.max_upload_size_mb == 2
        assert settings.max_upload_size_bytes == 2 * 1024 * 1024
        assert settings.template_filename == "Template_Automation.xlsx"
        assert settings.download_dir == Path("data/templates")
        assert settings.log_level == "WARNING"
        assert settings.api_token == "tok"

    def test_settings_loads_files_from_cwd(self, tmp_path):
        (tmp_path / "config.toml").write_text("[imports]\nmax_upload_mb = 3\n")
        (tmp_path / "secrets.env").write_text("TESTDECK_API_TOKEN=cwd-token\n")

        settings = Settings()
        assert settings.max_upload_size_mb == 3
        assert settings.api_token == "cwd-token"

    def test_get_settings_singleton(self):
        s1 = get_settings()
        s2 = get_settings()
        assert s1 is s2

    def test_reset_settings_clears_cache(self):
        s1 = get_settings()
        reset_settings()
        s2 = get_settings()
        assert s1 is not s2

    def test_settings_proxy_delegates(self, tmp_path):
        (tmp_path / "config.toml").write_text('[api]\nbase_url = "http://proxy.test"\n')
        assert settings_proxy.api_base_url == "http://proxy.test"


class TestFindConfigFile:
    """Test find_config_file and find_secrets_file."""

    def test_find_config_file_in_cwd(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("[api]\ntimeout_seconds = 5\n")

        assert find_config_file() == config_file

    def test_find_config_file_in_home(self, tmp_path):
        user_dir = tmp_path / ".config" / "testdeck"
        user_dir.mkdir(parents=True)
        config_file = user_dir / "config.toml"
        config_file.write_text("")

        assert find_config_file() == config_file

    def test_find_config_file_not_found(self):
        assert find_config_file() is None

    def test_find_secrets_file_in_cwd(self, tmp_path):
        secrets_file = tmp_path / "secrets.env"
        secrets_file.write_text("TESTDECK_API_TOKEN=test\n")

        assert find_secrets_file() == secrets_file

    def test_find_secrets_file_not_found(self):
        assert find_secrets_file() is None
