"""Database-specific type mapping tables.

Each mapper holds an ordered list of rules. A rule pairs a matcher, either a
set of exact native type names or a predicate over the lower-cased name, with
the TypeScript type it maps to. Rules are evaluated top to bottom and the
first match wins; no match means the type is unknown to the dialect.
"""

from typing import Callable, FrozenSet, List, Optional, Tuple, Union

Matcher = Union[FrozenSet[str], Callable[[str], bool]]
Rule = Tuple[Matcher, str]


def names(*type_names: str) -> FrozenSet[str]:
    """Exact-match set of native type names."""
    return frozenset(type_names)


def contains(*fragments: str) -> Callable[[str], bool]:
    """Predicate matching native type names containing any fragment."""
    def _matches(type_name: str) -> bool:
        return any(fragment in type_name for fragment in fragments)
    return _matches


class TypeMapper:
    """Base type mapper: ordered rules with a wildcard miss."""

    RULES: List[Rule] = []

    def normalize(self, udt_name: str) -> str:
        return udt_name

    def to_typescript_type(self, udt_name: str) -> Optional[str]:
        """Map a native type name to a TypeScript type, or None if unknown."""
        type_name = self.normalize(udt_name)
        for matcher, ts_type in self.RULES:
            if isinstance(matcher, frozenset):
                if type_name in matcher:
                    return ts_type
            elif matcher(type_name):
                return ts_type
        return None

    def known_types(self) -> List[str]:
        """All exact native type names the mapper knows about."""
        known = []
        for matcher, _ in self.RULES:
            if isinstance(matcher, frozenset):
                known.extend(sorted(matcher))
        return known


class PostgresTypeMapper(TypeMapper):
    """Type mapper for PostgreSQL ``udt_name`` values."""

    RULES = [
        (names("bpchar", "char", "varchar", "text", "citext", "uuid", "bytea",
               "inet", "time", "timetz", "interval", "name"), "string"),
        # node-postgres returns bigint as a string
        (names("int8"), "string"),
        (names("int2", "int4", "float8", "float4", "numeric", "money", "oid"), "number"),
        (names("bool"), "boolean"),
        (names("json", "jsonb"), "any"),
        (names("date", "timestamp", "timestamptz"), "Date"),
        (names("_int8"), "Array<string>"),
        (names("_int2", "_int4", "_float4", "_float8", "_numeric", "_money"), "Array<number>"),
        (names("_bool"), "Array<boolean>"),
        (names("_varchar", "_text", "_citext", "_uuid", "_bytea"), "Array<string>"),
        (names("_json", "_jsonb"), "Array<Object>"),
        (names("_timestamptz"), "Array<Date>"),
    ]


class MysqlTypeMapper(TypeMapper):
    """Type mapper for MySQL ``data_type`` values.

    Follows the conversions done by the mysqljs driver where sensible.
    """

    RULES = [
        # set and enum stay strings unless a synthesized enum type is known
        (names("char", "varchar", "text", "tinytext", "mediumtext", "longtext",
               "time", "geometry", "set", "enum"), "string"),
        (names("integer", "int", "smallint", "mediumint", "bigint", "double",
               "decimal", "numeric", "float", "year"), "number"),
        (names("tinyint"), "boolean"),
        (names("json"), "any"),
        (names("date", "datetime", "timestamp"), "Date"),
        (names("tinyblob", "mediumblob", "longblob", "blob", "binary",
               "varbinary", "bit"), "Buffer"),
    ]


class SqliteTypeMapper(TypeMapper):
    """Type mapper for SQLite declared column types.

    SQLite accepts any declared type, so after a few exact names the rules
    follow its type-affinity algorithm.
    """

    RULES = [
        (names("boolean", "bool"), "boolean"),
        (names("date", "datetime", "timestamp"), "Date"),
        (names("json"), "any"),
        (contains("int"), "number"),
        (contains("char", "clob", "text"), "string"),
        (contains("blob"), "Buffer"),
        (contains("real", "floa", "doub"), "number"),
        (names("numeric", "decimal"), "number"),
    ]

    def normalize(self, udt_name: str) -> str:
        # VARCHAR(255) -> varchar
        return udt_name.split("(", 1)[0].strip().lower()
