"""TypeScript generation module for schemats-cli.

This module renders reflected tables and enums as TypeScript declarations
and optionally reformats the result.
"""

from .generator import TypeScriptGenerator, RESERVED_NAMES
from .formatter import SourceFormatter, PrettierFormatter

__all__ = [
    "TypeScriptGenerator",
    "RESERVED_NAMES",
    "SourceFormatter",
    "PrettierFormatter",
]
