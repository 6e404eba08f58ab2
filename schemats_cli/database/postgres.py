"""PostgreSQL catalog adapter."""

import logging
from typing import List, Optional

from ..errors import ConnectionError
from .base import DatabaseAdapter
from .models import EnumTypes, TableDefinition
from .type_mappers import PostgresTypeMapper

logger = logging.getLogger(__name__)

ENUM_TYPES_QUERY = (
    "select n.nspname as schema, t.typname as name, e.enumlabel as value "
    "from pg_type t "
    "join pg_enum e on t.oid = e.enumtypid "
    "join pg_catalog.pg_namespace n ON n.oid = t.typnamespace "
    "{where} "
    "order by t.typname asc, e.enumlabel asc;"
)

TABLE_COLUMNS_QUERY = (
    "SELECT column_name, udt_name, is_nullable, column_default "
    "FROM information_schema.columns "
    "WHERE table_name = %s and table_schema = %s"
)

SCHEMA_TABLES_QUERY = (
    "SELECT table_name "
    "FROM information_schema.columns "
    "WHERE table_schema = %s "
    "GROUP BY table_name"
)


class PostgresDatabase(DatabaseAdapter):
    """Catalog adapter for PostgreSQL using psycopg2."""

    TYPE_MAPPER = PostgresTypeMapper()
    DEFAULT_SCHEMA = "public"

    def connect(self):
        """Connect to PostgreSQL."""
        if self._connection is not None:
            return self._connection

        try:
            import psycopg2
        except ImportError:
            raise ConnectionError(
                "psycopg2 is required for PostgreSQL connections. "
                "Install it with: pip install psycopg2-binary"
            )

        try:
            self._connection = psycopg2.connect(self.connection_string)
        except psycopg2.Error as e:
            raise ConnectionError(
                f"Could not connect to PostgreSQL: {e}",
                details={"driver": "psycopg2"},
            ) from e
        # Catalog reads only
        self._connection.set_session(readonly=True, autocommit=True)
        return self._connection

    def get_default_schema(self) -> str:
        return self.DEFAULT_SCHEMA

    def get_enum_types(self, schema: Optional[str] = None) -> EnumTypes:
        """Read enum labels from pg_enum, grouped by type name."""
        if schema:
            rows = self.query(ENUM_TYPES_QUERY.format(where="where n.nspname = %s"), [schema])
        else:
            rows = self.query(ENUM_TYPES_QUERY.format(where=""))

        enums: EnumTypes = {}
        for row in rows:
            enums.setdefault(row["name"], []).append(row["value"])
        return enums

    def get_custom_type_names(self, schema: str, enum_types: EnumTypes) -> List[str]:
        # Columns may reference enums declared in any schema
        return sorted(self.get_enum_types())

    def load_table_columns(self, table: TableDefinition) -> TableDefinition:
        table_definition = table.copy_empty()
        rows = self.query(TABLE_COLUMNS_QUERY, [table.table_name, table.schema_name])
        for row in rows:
            table_definition.columns[row["column_name"]] = self._new_column(
                udt_name=row["udt_name"],
                is_nullable=row["is_nullable"],
                default_value=row["column_default"],
            )
        logger.debug("Loaded %d columns for %s.%s", len(rows), table.schema_name, table.table_name)
        return table_definition

    def get_schema_tables(self, schema: str) -> List[TableDefinition]:
        rows = self.query(SCHEMA_TABLES_QUERY, [schema])
        tables = [
            TableDefinition(table_name=row["table_name"], schema_name=schema)
            for row in rows
        ]
        return sorted(tables, key=lambda t: t.table_name)
