"""Thin convenience layer over SQLite: location resolution, raw SQL helpers, table management."""
from __future__ import annotations

from .database import SQLiteDatabase
from .db import DatabaseLocation, resolve, resolve_db_path
from .errors import (
    DatabaseConnectionError,
    DatabaseContentError,
    DatabaseError,
    InvalidArgumentError,
)

__all__ = [
    "SQLiteDatabase",
    "DatabaseLocation",
    "resolve",
    "resolve_db_path",
    "DatabaseError",
    "DatabaseConnectionError",
    "DatabaseContentError",
    "InvalidArgumentError",
]

__version__ = "0.1.0"
