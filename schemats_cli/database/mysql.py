"""MySQL catalog adapter."""

import logging
import re
from typing import List, Optional
from urllib.parse import urlparse, unquote

from ..errors import ConnectionError, ConflictingEnumDefinition
from .base import DatabaseAdapter
from .models import EnumTypes, TableDefinition
from .type_mappers import MysqlTypeMapper

logger = logging.getLogger(__name__)

ENUM_TYPES_QUERY = (
    "SELECT column_name as `column_name`, column_type as `column_type`, data_type as `data_type` "
    ", column_comment as `column_comment` "
    "FROM information_schema.columns "
    "WHERE data_type IN ('enum', 'set') {where}"
)

TABLE_COLUMNS_QUERY = (
    "SELECT column_name as `column_name`, data_type as `data_type`, is_nullable as `is_nullable`, "
    "column_default as `column_default` "
    ", column_comment as `column_comment` "
    "FROM information_schema.columns "
    "WHERE table_name = %s and table_schema = %s"
)

SCHEMA_TABLES_QUERY = (
    "SELECT table_name as `table_name` "
    ", table_schema as `table_schema` "
    "FROM information_schema.columns "
    "WHERE table_schema = %s "
    "GROUP BY table_name, table_schema"
)

_ENUM_WRAPPER_RE = re.compile(r"^(enum|set)\('|'\)$", re.IGNORECASE)
_ENUM_DATA_TYPE_RE = re.compile(r"^(enum|set)$", re.IGNORECASE)


def parse_mysql_enumeration(column_type: str) -> List[str]:
    """Parse ``enum('a','b')`` / ``set('a','b')`` into its values."""
    inner = _ENUM_WRAPPER_RE.sub("", column_type)
    return [value.replace("''", "'") for value in inner.split("','")]


def get_enum_name_from_column(data_type: str, column_name: str) -> str:
    """Synthesized enum name for an enum/set column."""
    return f"{data_type}_{column_name}"


class MysqlDatabase(DatabaseAdapter):
    """Catalog adapter for MySQL using PyMySQL."""

    TYPE_MAPPER = MysqlTypeMapper()
    FALLBACK_SCHEMA = "public"

    def __init__(self, connection_string: str, connection=None):
        super().__init__(connection_string, connection=connection)
        self._url = urlparse(connection_string)
        database = unquote(self._url.path[1:]) if self._url.path else ""
        self._default_schema = database or self.FALLBACK_SCHEMA

    def connect(self):
        """Connect to MySQL."""
        if self._connection is not None:
            return self._connection

        try:
            import pymysql
        except ImportError:
            raise ConnectionError(
                "PyMySQL is required for MySQL connections. "
                "Install it with: pip install PyMySQL"
            )

        try:
            port = self._url.port or 3306
        except ValueError as e:
            raise ConnectionError(f"Malformed MySQL connection string: {e}") from e
        if not self._url.hostname:
            raise ConnectionError("Malformed MySQL connection string: missing host")

        try:
            self._connection = pymysql.connect(
                host=self._url.hostname,
                port=port,
                user=unquote(self._url.username or ""),
                password=unquote(self._url.password or ""),
                database=self._default_schema if self._url.path[1:] else None,
                charset="utf8mb4",
            )
        except pymysql.MySQLError as e:
            raise ConnectionError(
                f"Could not connect to MySQL: {e}",
                details={"driver": "pymysql"},
            ) from e
        return self._connection

    def get_default_schema(self) -> str:
        return self._default_schema

    def get_enum_types(self, schema: Optional[str] = None) -> EnumTypes:
        """Synthesize enum types from enum/set columns.

        MySQL has no enum catalog, so every enum/set column becomes an enum
        named ``<data_type>_<column_name>``.

        Raises:
            ConflictingEnumDefinition: If two columns produce the same name
                with different values
        """
        if schema:
            rows = self.query(ENUM_TYPES_QUERY.format(where="and table_schema = %s"), [schema])
        else:
            rows = self.query(ENUM_TYPES_QUERY.format(where=""))

        enums: EnumTypes = {}
        for row in rows:
            enum_name = get_enum_name_from_column(row["data_type"], row["column_name"])
            enum_values = parse_mysql_enumeration(row["column_type"])
            if enum_name in enums and enums[enum_name] != enum_values:
                raise ConflictingEnumDefinition(
                    enum_name, row["column_name"], enums[enum_name], enum_values
                )
            enums[enum_name] = enum_values
        return enums

    def load_table_columns(self, table: TableDefinition) -> TableDefinition:
        table_definition = table.copy_empty()
        rows = self.query(TABLE_COLUMNS_QUERY, [table.table_name, table.schema_name])
        for row in rows:
            column_name = row["column_name"]
            data_type = row["data_type"]
            if _ENUM_DATA_TYPE_RE.match(data_type):
                udt_name = get_enum_name_from_column(data_type, column_name)
            else:
                udt_name = data_type
            table_definition.columns[column_name] = self._new_column(
                udt_name=udt_name,
                is_nullable=row["is_nullable"],
                default_value=row["column_default"],
                comment=row.get("column_comment"),
            )
        logger.debug("Loaded %d columns for %s.%s", len(rows), table.schema_name, table.table_name)
        return table_definition

    def get_schema_tables(self, schema: str) -> List[TableDefinition]:
        rows = self.query(SCHEMA_TABLES_QUERY, [schema])
        tables = [
            TableDefinition(table_name=row["table_name"], schema_name=row["table_schema"])
            for row in rows
        ]
        return sorted(tables, key=lambda t: t.table_name)
