"""Configuration management for schemats-cli."""

import json
import os
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field, ValidationError
from typing import Any, Dict, Optional

from .errors import ConfigurationError
from .options import RenderOptions

DEFAULT_CONFIG_FILE = "schemats.json"

# camelCase keys accepted in schemats.json
_CONFIG_KEY_ALIASES = {
    "conn": "conn",
    "schema": "schema",
    "table": "table",
    "output": "output",
    "camelCase": "camel_case",
    "noHeader": "no_header",
    "tableNamespaces": "table_namespaces",
    "tableManifest": "table_manifest",
    "enumManifest": "enum_manifest",
    "forInsert": "for_insert",
    "forInsertNull": "for_insert_null",
    "addComments": "add_comments",
    "sqlite3": "sqlite3",
    "skipTables": "skip_tables",
    "skipPrefix": "skip_prefix",
    "customTypes": "custom_types",
    "customTypeTransform": "custom_type_transform",
    "customHeader": "custom_header",
    "customFooter": "custom_footer",
    "prettier": "prettier",
    "prettierConfig": "prettier_config",
}


def _find_env_file() -> Optional[str]:
    """Find .env file in the current directory or ~/.schemats/."""
    if os.path.exists(".env"):
        return ".env"

    user_env = Path.home() / ".schemats" / ".env"
    if user_env.exists():
        return str(user_env)

    return None


class Settings(BaseSettings):
    """Application settings loaded from SCHEMATS_* environment variables."""

    conn: Optional[str] = Field(
        default=None,
        description="Database connection string"
    )
    schema_name: Optional[str] = Field(
        default=None,
        description="Schema to generate types for"
    )
    output: Optional[str] = Field(
        default=None,
        description="Output file path"
    )
    config_file: str = Field(
        default=DEFAULT_CONFIG_FILE,
        description="JSON file holding default options"
    )
    prettier_executable: str = Field(
        default="prettier",
        description="prettier command used by the formatting pass"
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level for diagnostics"
    )

    class Config:
        env_prefix = "SCHEMATS_"
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


def load_config_file(path: Optional[str], required: bool = False) -> Dict[str, Any]:
    """Load option defaults from a JSON config file.

    Keys may be given in camelCase (``camelCase``, ``skipTables``) or
    snake_case.

    Args:
        path: Path to the JSON file
        required: Raise if the file is missing

    Raises:
        ConfigurationError: If the file is missing (and required) or invalid
    """
    if not path:
        return {}
    config_path = Path(path)
    if not config_path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {path}")
        return {}

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")

    return {_CONFIG_KEY_ALIASES.get(key, key): value for key, value in data.items()}


def parse_json_option(name: str, value: Optional[str]) -> Optional[Any]:
    """Parse a JSON-valued command line option."""
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"--{name} must be valid JSON: {e}") from e


def build_render_options(values: Dict[str, Any]) -> RenderOptions:
    """Build RenderOptions from merged config values.

    Raises:
        ConfigurationError: If a value has the wrong shape
    """
    fields = {key: value for key, value in values.items() if key in RenderOptions.model_fields}
    try:
        return RenderOptions(**fields)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid options: {e}") from e


# Global settings instance
settings = Settings()
