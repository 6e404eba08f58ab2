"""SQLite catalog adapter."""

import logging
import sqlite3
from typing import List, Optional

from ..errors import ConnectionError
from .base import DatabaseAdapter
from .models import EnumTypes, TableDefinition
from .type_mappers import SqliteTypeMapper

logger = logging.getLogger(__name__)

SCHEMA_TABLES_QUERY = (
    "SELECT name AS table_name "
    "FROM {schema}.sqlite_master "
    "WHERE type IN ('table', 'view') AND name NOT LIKE 'sqlite_%' "
    "ORDER BY name"
)

TABLE_COLUMNS_QUERY = "PRAGMA {schema}.table_info({table})"


def quote_identifier(name: str) -> str:
    """Quote an identifier for use in SQLite statements."""
    return '"' + name.replace('"', '""') + '"'


def database_path(connection_string: str) -> str:
    """Extract the file path from ``sqlite:///path`` style strings.

    Plain paths and ``:memory:`` are returned unchanged.
    """
    for prefix in ("sqlite3://", "sqlite://"):
        if connection_string.startswith(prefix):
            path = connection_string[len(prefix):]
            # sqlite:///relative.db -> relative.db, sqlite:////abs.db -> /abs.db
            if path.startswith("/"):
                path = path[1:]
            return path.split("?", 1)[0] or ":memory:"
    return connection_string


class SqliteDatabase(DatabaseAdapter):
    """Catalog adapter for SQLite using the sqlite3 module."""

    TYPE_MAPPER = SqliteTypeMapper()
    DEFAULT_SCHEMA = "main"

    def connect(self):
        """Open the SQLite database file."""
        if self._connection is not None:
            return self._connection

        path = database_path(self.connection_string)
        try:
            # Queries run on executor threads, serialized by the adapter lock
            self._connection = sqlite3.connect(path, check_same_thread=False)
        except sqlite3.Error as e:
            raise ConnectionError(
                f"Could not open SQLite database {path}: {e}",
                details={"path": path},
            ) from e
        return self._connection

    def get_default_schema(self) -> str:
        return self.DEFAULT_SCHEMA

    def get_enum_types(self, schema: Optional[str] = None) -> EnumTypes:
        # SQLite has no enum types
        return {}

    def get_schema_tables(self, schema: str) -> List[TableDefinition]:
        rows = self.query(SCHEMA_TABLES_QUERY.format(schema=quote_identifier(schema)))
        return [
            TableDefinition(table_name=row["table_name"], schema_name=schema)
            for row in rows
        ]

    def load_table_columns(self, table: TableDefinition) -> TableDefinition:
        table_definition = table.copy_empty()
        schema = table.schema_name or self.DEFAULT_SCHEMA
        rows = self.query(TABLE_COLUMNS_QUERY.format(
            schema=quote_identifier(schema),
            table=quote_identifier(table.table_name),
        ))
        for row in rows:
            not_null = bool(row["notnull"]) or bool(row["pk"])
            table_definition.columns[row["name"]] = self._new_column(
                udt_name=(row["type"] or "").lower(),
                is_nullable="NO" if not_null else "YES",
                default_value=row["dflt_value"],
            )
        logger.debug("Loaded %d columns for %s.%s", len(rows), schema, table.table_name)
        return table_definition
