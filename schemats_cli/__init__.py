"""schemats-cli - generate TypeScript definitions from SQL database schemas."""

__version__ = "0.1.0"
