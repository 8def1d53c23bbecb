from __future__ import annotations

# sqlite_wrapper/db.py
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

# DB path resolution order:
# 1) the environment variable named by the location (highest priority, when non-empty)
# 2) the fallback path of the location


@dataclass(frozen=True)
class DatabaseLocation:
    """Where the .sqlite file lives: an env var name plus a hardcoded fallback path."""

    env_var_name: str
    fallback_path: str


def candidate_db_path(location: DatabaseLocation) -> str:
    env_path = os.environ.get(location.env_var_name) if location.env_var_name else None
    # any non-empty value is used verbatim
    return env_path if env_path else location.fallback_path


def resolve_db_path(location: DatabaseLocation) -> str:
    path = candidate_db_path(location)

    # make sure the directory exists; the file itself is created by sqlite on first connect
    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


def build_connection_string(path: str) -> str:
    return Path(path).resolve().as_uri()


def resolve(location: DatabaseLocation) -> str:
    return build_connection_string(resolve_db_path(location))


@contextmanager
def get_conn(connection_string: str) -> Iterator[sqlite3.Connection]:
    """
    Open an SQLite connection for a single operation.
    Autocommit (isolation_level=None), row_factory set to Row, always closed on exit.
    """
    conn = sqlite3.connect(
        connection_string,
        uri=True,
        check_same_thread=False,
        isolation_level=None,
    )
    try:
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()
