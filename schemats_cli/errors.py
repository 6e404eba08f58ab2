"""Error types for schemats-cli."""

import json
from typing import Optional, Dict, Any, List


class SchematsError(Exception):
    """Base exception for schemats errors."""

    def __init__(self, message: str, code: str = "SCHEMATS_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for structured reporting."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConnectionError(SchematsError):
    """Malformed connection string, failed handshake or missing driver."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_ERROR", details=details)


class ConflictingEnumDefinition(SchematsError):
    """Two columns synthesize the same enum name with different values."""

    def __init__(self, enum_name: str, column_name: str, existing: List[str], conflicting: List[str]):
        super().__init__(
            "Multiple enums with the same name and contradicting types were found: "
            f"{column_name}: {_json_list(existing)} and {_json_list(conflicting)}",
            code="CONFLICTING_ENUM",
            details={
                "enum_name": enum_name,
                "column_name": column_name,
                "existing": list(existing),
                "conflicting": list(conflicting),
            },
        )
        self.enum_name = enum_name
        self.existing = list(existing)
        self.conflicting = list(conflicting)


class FormatterUnavailable(SchematsError):
    """The formatting pass was requested but its tool cannot be found."""

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message or "Install prettier (npm install -g prettier), or pass prettier=False to the schemats options",
            code="FORMATTER_UNAVAILABLE",
            details=details,
        )


class ConfigurationError(SchematsError):
    """Invalid configuration file or option value."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)


def _json_list(values: List[str]) -> str:
    # Compact form, e.g. ["a","b"]
    return json.dumps(list(values), separators=(",", ":"))
