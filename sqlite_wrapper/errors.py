from __future__ import annotations


class DatabaseError(Exception):
    def __init__(self, message: str, sql: str | None = None):
        super().__init__(message)
        self.sql = sql


class DatabaseConnectionError(DatabaseError):
    """Could not open or reach the database file."""

    def __init__(self, message: str, connection_string: str | None = None, sql: str | None = None):
        super().__init__(message, sql)
        self.connection_string = connection_string


class DatabaseContentError(DatabaseError):
    """The database was reached but rejected the command (bad SQL, missing table/column, constraint)."""


class InvalidArgumentError(ValueError):
    """A required argument was missing or malformed; raised before any connection attempt."""
