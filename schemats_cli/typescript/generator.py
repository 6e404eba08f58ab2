"""TypeScript code generator for reflected schemas."""

from typing import Sequence

from ..database.models import ColumnDefinition, EnumTypes, TableDefinition
from ..options import RESERVED_NAMES, RenderOptions, normalize_name

DEFAULT_TABLE_MANIFEST = "DBTables"
DEFAULT_ENUM_MANIFEST = "DBEnums"


class TypeScriptGenerator:
    """Generates TypeScript declarations from table and enum definitions.

    The generator holds nothing but the options; every method is a pure
    function of its arguments.
    """

    def __init__(self, options: RenderOptions):
        self.options = options

    def normalize_name(self, name: str) -> str:
        """Suffix names that collide with reserved identifiers."""
        return normalize_name(name)

    def colon(self, column: ColumnDefinition) -> str:
        """Member separator; ``?:`` marks a member optional on insert."""
        if not self.options.for_insert:
            return ":"
        if column.has_default:
            return "?:"
        if column.nullable and not self.options.for_insert_null:
            return "?:"
        return ":"

    def column_type(self, column: ColumnDefinition) -> str:
        """TypeScript type of a column, with ``| null`` when it is nullable.

        Custom types carry their own nullability.
        """
        if column.nullable and not column.ts_custom_type:
            return f"{column.ts_type} | null"
        return f"{column.ts_type}"

    def generate_enum_type(self, enums: EnumTypes) -> str:
        """Generate one union-of-literals type per enum."""
        lines = []
        for enum_name_raw, values in enums.items():
            enum_name = self.normalize_name(self.options.transform_type_name(enum_name_raw))
            literals = " | ".join(_string_literal(value) for value in values)
            lines.append(f"export type {enum_name} = {literals};")
        return "".join(line + "\n" for line in lines)

    def generate_table_interface_only(self, table: TableDefinition) -> str:
        """Generate an interface with the column types inlined."""
        table_name = self.options.transform_type_name(table.table_name)
        lines = [""]
        if self.options.add_comments and table.comment:
            lines.append(_doc_comment(table.comment))
        lines.append(f"export interface {self.normalize_name(table_name)} {{")

        for column_name_raw, column in table.sorted_columns():
            column_name = self.options.transform_column_name(column_name_raw)
            if self.options.add_comments and column.comment:
                lines.append("  " + _doc_comment(column.comment))
            lines.append(f"  {column_name}{self.colon(column)} {self.column_type(column)};")

        lines.append("}")
        lines.append("")
        return "\n".join(lines)

    def generate_table_types(self, table: TableDefinition) -> str:
        """Generate the ``<Table>Fields`` namespace holding one alias per column."""
        table_name = self.options.transform_type_name(table.table_name)
        lines = ["", f"export namespace {table_name}Fields {{"]

        for column_name_raw, column in table.sorted_columns():
            column_name = self.options.transform_column_name(column_name_raw)
            lines.append(
                f"  export type {self.normalize_name(column_name)} = {self.column_type(column)};"
            )

        lines.append("}")
        lines.append("")
        return "\n".join(lines)

    def generate_table_interface(self, table: TableDefinition) -> str:
        """Generate an interface whose members reference the Fields namespace."""
        table_name = self.options.transform_type_name(table.table_name)
        lines = [""]
        if self.options.add_comments and table.comment:
            lines.append(_doc_comment(table.comment))
        lines.append(f"export interface {self.normalize_name(table_name)} {{")

        for column_name_raw, column in table.sorted_columns():
            column_name = self.options.transform_column_name(column_name_raw)
            if self.options.add_comments and column.comment:
                lines.append("  " + _doc_comment(column.comment))
            lines.append(
                f"  {column_name}{self.colon(column)} "
                f"{table_name}Fields.{self.normalize_name(column_name)};"
            )

        lines.append("}")
        lines.append("")
        return "\n".join(lines)

    def generate_table(self, table: TableDefinition) -> str:
        """Generate all declarations for one table."""
        if self.options.table_namespaces:
            return self.generate_table_types(table) + self.generate_table_interface(table)
        return self.generate_table_interface_only(table)

    def generate_table_manifest(self, tables: Sequence[str]) -> str:
        """Generate the lookup interface of table name to table type."""
        manifest = self.options.table_manifest
        type_name = manifest if isinstance(manifest, str) else DEFAULT_TABLE_MANIFEST

        lines = ["", f"export interface {type_name} {{"]
        for table_name in tables:
            member = self.options.transform_column_name(table_name)
            table_type = self.normalize_name(self.options.transform_type_name(table_name))
            lines.append(f"  {member}: {table_type};")
        lines.append("}")
        lines.append("")
        return "\n".join(lines)

    def generate_enum_manifest(self, enums: EnumTypes) -> str:
        """Generate the lookup interface of enum name to enum type."""
        manifest = self.options.enum_manifest
        type_name = manifest if isinstance(manifest, str) else DEFAULT_ENUM_MANIFEST

        lines = ["", f"export interface {type_name} {{"]
        for enum_name_raw in enums:
            member = self.options.transform_type_name(enum_name_raw)
            lines.append(f"  {member}: {self.normalize_name(member)};")
        lines.append("}")
        lines.append("")
        return "\n".join(lines)


def _string_literal(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _doc_comment(text: str) -> str:
    # Keep comments on one line and unable to close the block early
    flattened = " ".join(text.replace("*/", "* /").split())
    return f"/** {flattened} */"
