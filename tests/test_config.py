"""Tests for configuration loading."""

import json

import pytest

from schemats_cli.config import (
    Settings,
    build_render_options,
    load_config_file,
    parse_json_option,
)
from schemats_cli.errors import ConfigurationError


class TestSettings:
    """Test environment-backed settings."""

    def test_env_prefix(self, monkeypatch):
        """SCHEMATS_* variables populate the settings."""
        monkeypatch.setenv("SCHEMATS_CONN", "postgres://localhost/app")
        monkeypatch.setenv("SCHEMATS_SCHEMA_NAME", "reporting")
        settings = Settings()
        assert settings.conn == "postgres://localhost/app"
        assert settings.schema_name == "reporting"

    def test_defaults(self, monkeypatch):
        """Unset variables fall back to defaults."""
        monkeypatch.delenv("SCHEMATS_PRETTIER_EXECUTABLE", raising=False)
        monkeypatch.delenv("SCHEMATS_CONFIG_FILE", raising=False)
        settings = Settings()
        assert settings.prettier_executable == "prettier"
        assert settings.config_file == "schemats.json"


class TestLoadConfigFile:
    """Test JSON config files."""

    def test_camel_case_keys(self, tmp_path):
        """camelCase keys are converted to option names."""
        path = tmp_path / "schemats.json"
        path.write_text(json.dumps({
            "conn": "mysql://localhost/shop",
            "camelCase": True,
            "skipTables": ["migrations"],
            "enumManifest": "Enums",
        }))

        assert load_config_file(str(path)) == {
            "conn": "mysql://localhost/shop",
            "camel_case": True,
            "skip_tables": ["migrations"],
            "enum_manifest": "Enums",
        }

    def test_missing_optional_file(self, tmp_path):
        """A missing default config file is not an error."""
        assert load_config_file(str(tmp_path / "absent.json")) == {}
        assert load_config_file(None) == {}

    def test_missing_required_file(self, tmp_path):
        """A config file named explicitly must exist."""
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_config_file(str(tmp_path / "absent.json"), required=True)

    def test_invalid_json(self, tmp_path):
        """Broken JSON is reported with the file name."""
        path = tmp_path / "schemats.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_config_file(str(path))

    def test_non_object(self, tmp_path):
        """The top level must be an object."""
        path = tmp_path / "schemats.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigurationError, match="must contain a JSON object"):
            load_config_file(str(path))


class TestOptionParsing:
    """Test JSON option values and option building."""

    def test_parse_json_option(self):
        """JSON values are decoded; None passes through."""
        assert parse_json_option("custom-types", '{"users": {"id": "UserId"}}') == {"users": {"id": "UserId"}}
        assert parse_json_option("custom-types", None) is None

    def test_parse_json_option_invalid(self):
        """Invalid JSON names the option."""
        with pytest.raises(ConfigurationError, match="--custom-types must be valid JSON"):
            parse_json_option("custom-types", "{users")

    def test_build_render_options_ignores_other_keys(self):
        """Connection-level keys are not render options."""
        options = build_render_options({
            "conn": "postgres://localhost/app",
            "output": "db.ts",
            "camel_case": True,
        })
        assert options.camel_case is True

    def test_build_render_options_invalid(self):
        """Wrongly shaped values are configuration errors."""
        with pytest.raises(ConfigurationError, match="Invalid options"):
            build_render_options({"custom_types": ["not", "a", "mapping"]})
