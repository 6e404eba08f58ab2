"""Test fixtures package."""

from .fake_db import FakeConnection, FakeCursor

__all__ = [
    "FakeConnection",
    "FakeCursor",
]
