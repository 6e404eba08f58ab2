"""Shared pytest fixtures for schemats-cli tests."""

import sqlite3

import pytest

from schemats_cli.database.models import ColumnDefinition, TableDefinition
from schemats_cli.database.sqlite import SqliteDatabase
from schemats_cli.options import RenderOptions
from tests.fixtures import FakeConnection


@pytest.fixture
def render_options():
    """Default render options."""
    return RenderOptions()


@pytest.fixture
def fake_connection():
    """Fake DB-API connection with no configured responses."""
    return FakeConnection()


@pytest.fixture
def users_table():
    """Raw (unmapped) users table as a Postgres catalog would report it."""
    return TableDefinition(
        table_name="users",
        schema_name="public",
        columns={
            "id": ColumnDefinition(udt_name="int4", nullable=False, default_value="nextval('users_id_seq'::regclass)"),
            "email": ColumnDefinition(udt_name="varchar", nullable=False),
            "bio": ColumnDefinition(udt_name="text", nullable=True),
        },
    )


@pytest.fixture
def mapped_users_table():
    """Users table after the type-mapping pass."""
    return TableDefinition(
        table_name="users",
        schema_name="public",
        columns={
            "id": ColumnDefinition(udt_name="int4", nullable=False, default_value="nextval('users_id_seq'::regclass)", ts_type="number"),
            "email": ColumnDefinition(udt_name="varchar", nullable=False, ts_type="string"),
            "bio": ColumnDefinition(udt_name="text", nullable=True, ts_type="string"),
        },
    )


@pytest.fixture
def sqlite_connection():
    """In-memory SQLite database with a small application schema."""
    connection = sqlite3.connect(":memory:", check_same_thread=False)
    connection.executescript("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            email VARCHAR(255) NOT NULL,
            bio TEXT,
            is_admin BOOLEAN NOT NULL DEFAULT 0,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        );
        CREATE TABLE audit_log (
            id INTEGER PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id),
            payload BLOB,
            score REAL,
            extra
        );
        CREATE TABLE tmp_cache (
            cache_key TEXT PRIMARY KEY,
            value TEXT
        );
        CREATE VIEW admin_users AS SELECT id, email FROM users WHERE is_admin = 1;
    """)
    yield connection
    connection.close()


@pytest.fixture
def sqlite_db(sqlite_connection):
    """SQLite adapter bound to the in-memory database."""
    return SqliteDatabase("sqlite://:memory:", connection=sqlite_connection)
