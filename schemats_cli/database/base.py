"""Abstract base class for catalog adapters."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from ..errors import ConnectionError
from ..options import RenderOptions, normalize_name
from .models import ColumnDefinition, EnumTypes, TableDefinition
from .type_mappers import TypeMapper

logger = logging.getLogger(__name__)

UNKNOWN_TS_TYPE = "any"


class DatabaseAdapter(ABC):
    """Abstract base class for reading a database catalog.

    Subclasses issue the dialect-specific catalog queries and normalize the
    rows into TableDefinition / ColumnDefinition objects. Mapping native types
    to TypeScript types is shared and performs no I/O.
    """

    # Override in subclasses
    TYPE_MAPPER: TypeMapper = TypeMapper()

    def __init__(self, connection_string: str, connection: Any = None):
        """Initialize the adapter.

        Args:
            connection_string: Database URL (credentials included)
            connection: Optional already-open DB-API connection
        """
        self.connection_string = connection_string
        self._connection = connection
        # One DB-API handle is shared by the per-table workers
        self._lock = threading.Lock()
        self._closed = False

    @abstractmethod
    def connect(self):
        """Open the connection if needed and return it.

        Raises:
            ConnectionError: If the driver is missing, the connection string
                is malformed or the handshake fails
        """
        pass

    @abstractmethod
    def get_default_schema(self) -> str:
        """Schema used when the caller does not name one."""
        pass

    @abstractmethod
    def get_enum_types(self, schema: Optional[str] = None) -> EnumTypes:
        """Get the enum types of a schema (all schemas when omitted)."""
        pass

    @abstractmethod
    def get_schema_tables(self, schema: str) -> List[TableDefinition]:
        """Get placeholder definitions (no columns) for the tables of a schema."""
        pass

    @abstractmethod
    def load_table_columns(self, table: TableDefinition) -> TableDefinition:
        """Return a copy of ``table`` with its raw catalog columns."""
        pass

    def close(self):
        """Close the connection.

        Waits for an in-flight query, and later queries fail instead of
        reconnecting.
        """
        with self._lock:
            self._closed = True
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """Run one catalog query and return its rows as dicts."""
        with self._lock:
            if self._closed:
                raise ConnectionError("Database adapter is closed")
            conn = self.connect()
            cursor = conn.cursor()
            try:
                logger.debug("Executing catalog query: %s params=%s", sql, params)
                if params is None:
                    cursor.execute(sql)
                else:
                    cursor.execute(sql, params)
                columns = [desc[0] for desc in cursor.description or []]
                return [dict(zip(columns, row)) for row in cursor.fetchall()]
            finally:
                cursor.close()

    def get_custom_type_names(self, schema: str, enum_types: EnumTypes) -> List[str]:
        """Names of the custom (enum) types columns may reference."""
        return sorted(enum_types)

    def map_table_types(
        self,
        table: TableDefinition,
        custom_types: Sequence[str],
        options: RenderOptions,
    ) -> TableDefinition:
        """Assign a TypeScript type to every column of ``table``.

        Precedence: per table/column override, native type override, the
        dialect mapping table, known custom types, then ``any``.
        """
        for column_name, column in table.columns.items():
            override = options.custom_type_for(table.table_name, column_name)
            if override is not None:
                column.ts_custom_type = True
                column.ts_type = override
                continue

            if options.custom_type_transform and column.udt_name in options.custom_type_transform:
                column.ts_type = options.custom_type_transform[column.udt_name]
                continue

            ts_type = self.TYPE_MAPPER.to_typescript_type(column.udt_name)
            if ts_type is not None:
                column.ts_type = ts_type
            elif column.udt_name in custom_types:
                column.ts_type = normalize_name(options.transform_type_name(column.udt_name))
            else:
                logger.warning(
                    "Type [%s] has been mapped to [%s] because no specific type has been found.",
                    column.udt_name, UNKNOWN_TS_TYPE,
                )
                column.ts_type = UNKNOWN_TS_TYPE
        return table

    def get_table_types(
        self,
        table: TableDefinition,
        custom_types: Sequence[str],
        options: RenderOptions,
    ) -> TableDefinition:
        """Load the columns of ``table`` and map them to TypeScript types."""
        return self.map_table_types(self.load_table_columns(table), custom_types, options)

    @staticmethod
    def _new_column(
        udt_name: str,
        is_nullable: Any,
        default_value: Optional[Any],
        comment: Optional[str] = None,
    ) -> ColumnDefinition:
        return ColumnDefinition(
            udt_name=udt_name,
            nullable=is_nullable == "YES",
            default_value=None if default_value is None else str(default_value),
            comment=comment or "",
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
