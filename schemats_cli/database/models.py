"""Database data models for schema introspection."""

from typing import Optional, List, Dict
from dataclasses import dataclass, field

# Enum name -> ordered list of its values
EnumTypes = Dict[str, List[str]]


@dataclass
class ColumnDefinition:
    """Represents a catalog column, normalized across dialects."""
    udt_name: str
    nullable: bool = True
    default_value: Optional[str] = None
    comment: str = ""
    ts_type: Optional[str] = None
    ts_custom_type: bool = False

    @property
    def has_default(self) -> bool:
        return self.default_value is not None


@dataclass
class TableDefinition:
    """Represents a database table or view."""
    table_name: str
    schema_name: str = ""
    comment: str = ""
    columns: Dict[str, ColumnDefinition] = field(default_factory=dict)

    def sorted_columns(self) -> List[tuple]:
        """Columns as (name, definition) pairs in column-name order."""
        return [(name, self.columns[name]) for name in sorted(self.columns)]

    def copy_empty(self) -> "TableDefinition":
        """Copy of the table identity without any columns."""
        return TableDefinition(
            table_name=self.table_name,
            schema_name=self.schema_name,
            comment=self.comment,
        )
