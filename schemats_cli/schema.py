"""Schema-to-TypeScript orchestration.

Resolves the schema and table list, reflects every table concurrently and
assembles the generated declarations into one TypeScript source text.
"""

import asyncio
import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from . import __version__
from .database import DatabaseAdapter, TableDefinition, get_database, redact_connection_string
from .options import RenderOptions
from .typescript import PrettierFormatter, SourceFormatter, TypeScriptGenerator

logger = logging.getLogger(__name__)

OptionsLike = Union[RenderOptions, Mapping[str, Any], None]


def _coerce_options(options: OptionsLike) -> RenderOptions:
    if options is None:
        return RenderOptions()
    if isinstance(options, RenderOptions):
        return options
    return RenderOptions(**options)


def build_header(
    db: DatabaseAdapter,
    tables: Sequence[str],
    schema: Optional[str],
    options: RenderOptions,
) -> str:
    """Build the auto-generated file banner.

    The banner records the command that reproduces the file, with the
    connection credentials replaced by placeholders.
    """
    commands = ["schemats", "generate", "-c", redact_connection_string(db.connection_string)]
    if options.camel_case:
        commands.append("-C")
    for table in tables:
        commands.extend(["-t", table])
    if schema:
        commands.extend(["-s", schema])

    lines = [
        "/**",
        " * AUTO-GENERATED FILE - DO NOT EDIT!",
        " *",
        f" * This file was automatically generated by schemats v.{__version__}",
        f" * $ {' '.join(commands)}",
        " *",
        " */",
        "",
        "",
    ]
    return "\n".join(lines)


async def typescript_of_table(
    db: DatabaseAdapter,
    table: Union[str, TableDefinition],
    schema: str,
    options: OptionsLike = None,
    custom_types: Sequence[str] = (),
) -> str:
    """Reflect one table and render its declarations."""
    options = _coerce_options(options)
    if isinstance(table, str):
        table = TableDefinition(table_name=table, schema_name=schema)

    loop = asyncio.get_event_loop()
    table_def = await loop.run_in_executor(
        None, lambda: db.get_table_types(table, custom_types, options)
    )
    return TypeScriptGenerator(options).generate_table(table_def)


async def typescript_of_schema(
    db: Union[str, DatabaseAdapter],
    tables: Optional[Sequence[str]] = None,
    schema: Optional[str] = None,
    options: OptionsLike = None,
    formatter: Optional[SourceFormatter] = None,
) -> str:
    """Generate the TypeScript declarations for a schema.

    Args:
        db: Connection string or catalog adapter
        tables: Explicit table names; empty means every table in the schema
        schema: Schema name; defaults to the adapter's default schema
        options: RenderOptions or a mapping of option values
        formatter: Formatting pass used when ``options.prettier`` is set

    Returns:
        The generated TypeScript source

    Raises:
        ConnectionError: If the database cannot be reached
        ConflictingEnumDefinition: If synthesized enums disagree
        FormatterUnavailable: If formatting is requested but unavailable
    """
    options = _coerce_options(options)
    requested_tables = list(tables or [])

    owns_connection = isinstance(db, str)
    if owns_connection:
        db = get_database(db, options)

    try:
        output = await _render_schema(db, requested_tables, schema, options)
    finally:
        if owns_connection:
            db.close()

    if options.prettier:
        formatter = formatter or PrettierFormatter()
        output = formatter.format(output, options.prettier_config)

    return output


async def _render_schema(
    db: DatabaseAdapter,
    requested_tables: List[str],
    schema: Optional[str],
    options: RenderOptions,
) -> str:
    loop = asyncio.get_event_loop()
    generator = TypeScriptGenerator(options)

    if not schema:
        schema = db.get_default_schema()

    if requested_tables:
        table_defs = [
            TableDefinition(table_name=name, schema_name=schema)
            for name in requested_tables
        ]
    else:
        table_defs = await loop.run_in_executor(None, db.get_schema_tables, schema)

    table_defs = [t for t in table_defs if not options.is_table_skipped(t.table_name)]
    table_names = [t.table_name for t in table_defs]
    logger.info("Generating %d tables from schema %s", len(table_names), schema)

    enums = await loop.run_in_executor(None, db.get_enum_types, schema)
    custom_types = await loop.run_in_executor(None, db.get_custom_type_names, schema, enums)

    # Results come back in table order; every worker finishes before the
    # first failure (in table order) propagates
    results = await asyncio.gather(*[
        typescript_of_table(db, table_def, schema, options, custom_types)
        for table_def in table_defs
    ], return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    interfaces = list(results)

    output = ""
    if options.custom_header:
        output += options.custom_header
        output += "\n"
    else:
        output += "/* tslint:disable */\n\n"
        if options.write_header:
            output += build_header(db, requested_tables, schema, options)

    output += generator.generate_enum_type(enums)
    output += "".join(interfaces)

    if options.table_manifest:
        output += generator.generate_table_manifest(table_names)

    if options.enum_manifest and enums:
        output += generator.generate_enum_manifest(enums)

    if options.custom_footer:
        output += options.custom_footer

    return output


def generate(
    db: Union[str, DatabaseAdapter],
    tables: Optional[Sequence[str]] = None,
    schema: Optional[str] = None,
    options: OptionsLike = None,
    formatter: Optional[SourceFormatter] = None,
) -> str:
    """Synchronous entry point for ``typescript_of_schema``."""
    return asyncio.run(typescript_of_schema(db, tables, schema, options, formatter))
