"""Render options for TypeScript generation."""

import re
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

# Word boundaries follow lodash's camelCase: separators, lower->upper,
# acronym->word (HTTPServer -> HTTP Server) and letter<->digit transitions.
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")

# Identifiers that cannot be used as generated type names
RESERVED_NAMES = frozenset({"string", "number", "package"})


def split_words(value: str) -> List[str]:
    """Split an identifier into its words."""
    return _WORD_RE.findall(value)


def camel_case(value: str) -> str:
    """Convert a name to camelCase (``user_id`` -> ``userId``)."""
    words = split_words(value)
    if not words:
        return ""
    first, rest = words[0].lower(), words[1:]
    return first + "".join(word[:1].upper() + word[1:].lower() for word in rest)


def upper_first(value: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    return value[:1].upper() + value[1:]


def normalize_name(name: str) -> str:
    """Suffix names that collide with reserved identifiers."""
    if name in RESERVED_NAMES:
        return name + "_"
    return name


class RenderOptions(BaseModel):
    """Immutable snapshot of the generation options."""

    sqlite3: bool = Field(default=False, description="Treat the connection as a SQLite database")
    prettier: bool = Field(default=False, description="Run prettier over the generated output")
    prettier_config: Optional[Dict[str, Any]] = Field(default=None, description="Options passed to prettier")
    camel_case: bool = Field(default=False, description="Camel-case member names and Pascal-case type names")
    write_header: bool = Field(default=True, description="Write the auto-generated file banner")
    custom_header: Optional[str] = None
    custom_footer: Optional[str] = None
    table_namespaces: bool = Field(default=False, description="Emit a <Table>Fields namespace per table")
    table_manifest: Union[bool, str] = Field(
        default=True,
        description="Emit a lookup of all tables; a string names the interface"
    )
    enum_manifest: Union[bool, str] = Field(
        default=False,
        description="Emit a lookup of all enums; a string names the interface"
    )
    for_insert: bool = Field(default=False, description="Make columns with a default optional")
    for_insert_null: bool = Field(default=False, description="Keep nullable columns without a default required")
    add_comments: bool = Field(default=False, description="Emit catalog comments as doc comments")
    custom_types: Optional[Dict[str, Dict[str, str]]] = Field(
        default=None,
        description="Per table, per column TypeScript type overrides"
    )
    custom_type_transform: Optional[Dict[str, str]] = Field(
        default=None,
        description="Native type name to TypeScript type overrides"
    )
    skip_tables: Optional[List[str]] = None
    skip_prefix: Optional[List[str]] = None

    class Config:
        frozen = True

    def transform_type_name(self, type_name: str) -> str:
        """Name used for a generated type (interface, enum, namespace)."""
        if self.camel_case:
            return upper_first(camel_case(type_name))
        return type_name

    def transform_column_name(self, column_name: str) -> str:
        """Name used for a generated member."""
        if self.camel_case:
            return camel_case(column_name)
        return column_name

    def custom_type_for(self, table_name: str, column_name: str) -> Optional[str]:
        """Return the user override for a table column, if any."""
        if not self.custom_types:
            return None
        return self.custom_types.get(table_name, {}).get(column_name)

    def is_table_skipped(self, table_name: str) -> bool:
        """Whether the skip filters exclude a table."""
        if self.skip_tables and table_name in self.skip_tables:
            return True
        if self.skip_prefix and any(table_name.startswith(prefix) for prefix in self.skip_prefix):
            return True
        return False
