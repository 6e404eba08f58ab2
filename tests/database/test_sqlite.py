"""Tests for the SQLite catalog adapter against an in-memory database."""

import pytest

from schemats_cli.database import SqliteDatabase, TableDefinition
from schemats_cli.database.sqlite import database_path, quote_identifier


class TestSqliteConnectionString:
    """Test path extraction from connection strings."""

    @pytest.mark.parametrize("connection_string,path", [
        ("sqlite:///app.db", "app.db"),
        ("sqlite:////var/data/app.db", "/var/data/app.db"),
        ("sqlite3:///app.db", "app.db"),
        ("sqlite://:memory:", ":memory:"),
        ("sqlite://", ":memory:"),
        ("./local.db", "./local.db"),
        ("sqlite:///app.db?mode=ro", "app.db"),
    ])
    def test_database_path(self, connection_string, path):
        """Scheme prefixes and query strings are removed."""
        assert database_path(connection_string) == path

    def test_quote_identifier(self):
        """Embedded quotes are doubled."""
        assert quote_identifier('we"ird') == '"we""ird"'

    def test_connect_opens_file(self, tmp_path):
        """Connecting opens (and creates) the database file."""
        path = tmp_path / "app.db"
        with SqliteDatabase(f"sqlite:///{path}") as db:
            assert db.connect() is db.connect()
        assert path.exists()


class TestSqliteCatalog:
    """Test catalog reads."""

    def test_default_schema(self, sqlite_db):
        """SQLite's default schema is main."""
        assert sqlite_db.get_default_schema() == "main"

    def test_no_enum_types(self, sqlite_db):
        """SQLite has no enum catalog."""
        assert sqlite_db.get_enum_types("main") == {}
        assert sqlite_db.get_custom_type_names("main", {}) == []

    def test_schema_tables(self, sqlite_db):
        """Tables and views are listed alphabetically."""
        tables = sqlite_db.get_schema_tables("main")
        assert [t.table_name for t in tables] == ["admin_users", "audit_log", "tmp_cache", "users"]
        assert all(t.schema_name == "main" for t in tables)

    def test_load_table_columns(self, sqlite_db):
        """PRAGMA table_info rows are normalized."""
        table = sqlite_db.load_table_columns(TableDefinition(table_name="users", schema_name="main"))

        assert sorted(table.columns) == ["bio", "created_at", "email", "id", "is_admin"]
        assert table.columns["id"].udt_name == "integer"
        assert table.columns["id"].nullable is False
        assert table.columns["email"].udt_name == "varchar(255)"
        assert table.columns["email"].nullable is False
        assert table.columns["bio"].nullable is True
        assert table.columns["bio"].default_value is None
        assert table.columns["is_admin"].default_value == "0"
        assert table.columns["created_at"].default_value == "CURRENT_TIMESTAMP"

    def test_get_table_types(self, sqlite_db, render_options):
        """Loading and mapping together yields TypeScript types."""
        table = sqlite_db.get_table_types(
            TableDefinition(table_name="audit_log", schema_name="main"), [], render_options
        )
        assert table.columns["id"].ts_type == "number"
        assert table.columns["payload"].ts_type == "Buffer"
        assert table.columns["score"].ts_type == "number"
        # Columns declared without a type have no affinity rule
        assert table.columns["extra"].ts_type == "any"
