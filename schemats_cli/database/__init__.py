"""Database catalog adapters for schemats-cli.

This module provides dialect-agnostic catalog reflection with specific
implementations for PostgreSQL, MySQL and SQLite.
"""

from typing import Optional

from ..errors import ConnectionError
from ..options import RenderOptions
from .models import ColumnDefinition, TableDefinition, EnumTypes
from .base import DatabaseAdapter, UNKNOWN_TS_TYPE
from .type_mappers import TypeMapper, PostgresTypeMapper, MysqlTypeMapper, SqliteTypeMapper
from .postgres import PostgresDatabase
from .mysql import MysqlDatabase
from .sqlite import SqliteDatabase


def get_database(connection_string: str, options: Optional[RenderOptions] = None) -> DatabaseAdapter:
    """Pick the adapter for a connection string.

    Args:
        connection_string: Database URL such as ``postgres://user:pw@host/db``
        options: Render options; ``sqlite3`` forces the SQLite adapter

    Raises:
        ConnectionError: If the scheme is not supported
    """
    if options is not None and options.sqlite3:
        return SqliteDatabase(connection_string)

    scheme = connection_string.split("://", 1)[0].lower() if "://" in connection_string else ""
    if scheme in ("postgres", "postgresql"):
        return PostgresDatabase(connection_string)
    if scheme == "mysql":
        return MysqlDatabase(connection_string)
    if scheme in ("sqlite", "sqlite3"):
        return SqliteDatabase(connection_string)

    raise ConnectionError(
        f"SQL version unsupported in connection: {redact_connection_string(connection_string)}",
        details={"scheme": scheme},
    )


def redact_connection_string(connection_string: str) -> str:
    """Replace the credentials of a connection URL with placeholders."""
    scheme, sep, rest = connection_string.partition("://")
    if not sep or "@" not in rest:
        return connection_string
    return f"{scheme}://username:password@{rest.rsplit('@', 1)[1]}"


__all__ = [
    # Data models
    "ColumnDefinition",
    "TableDefinition",
    "EnumTypes",
    # Base classes
    "DatabaseAdapter",
    "UNKNOWN_TS_TYPE",
    # Type mappers
    "TypeMapper",
    "PostgresTypeMapper",
    "MysqlTypeMapper",
    "SqliteTypeMapper",
    # Adapters
    "PostgresDatabase",
    "MysqlDatabase",
    "SqliteDatabase",
    "get_database",
    "redact_connection_string",
]
