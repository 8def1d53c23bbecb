"""
SQLite convenience layer: raw SQL commands plus a few generic table helpers.

Every call opens its own connection and closes it at the end; nothing is held across calls.
Locking of concurrent writers is left to SQLite's own file locking.
"""
from __future__ import annotations

import logging
import os
import sqlite3
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, TypeVar, Union

from .db import DatabaseLocation, candidate_db_path, get_conn, resolve
from .errors import DatabaseConnectionError, DatabaseContentError, InvalidArgumentError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Params = Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]
Row = Dict[str, Any]

MASTER_TABLE = "sqlite_master"
_LIST_TABLES_SQL = (
    f"SELECT name FROM {MASTER_TABLE} "
    "WHERE type='table' AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\' "
    "ORDER BY name"
)


def _noop_log(message: str) -> None:
    return None


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _bind_params(params: Params) -> Optional[Dict[str, Any]]:
    """Normalize parameters to the dict sqlite3 expects for named placeholders.

    ``@name``, ``:name`` and ``$name`` all bind under ``name``; the last duplicate wins.
    Raises InvalidArgumentError for anything that is not a mapping or a sequence of
    ``(name, value)`` pairs.
    """
    if params is None:
        return None
    if isinstance(params, Mapping):
        items = list(params.items())
    elif isinstance(params, (str, bytes)):
        raise InvalidArgumentError("params must be a mapping or (name, value) pairs, got a string.")
    else:
        items = list(params)
    bound: Dict[str, Any] = {}
    for item in items:
        if isinstance(item, (str, bytes)) or not isinstance(item, (tuple, list)) or len(item) != 2:
            raise InvalidArgumentError(f"parameter {item!r} is not a (name, value) pair.")
        name, value = item
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(f"parameter name {name!r} must be a non-empty string.")
        key = name[1:] if name[:1] in ("@", ":", "$") else name
        bound[key] = value
    return bound


class SQLiteDatabase:
    """
    Wraps sqlite3 behind a small table-oriented interface and manages the connection settings.

    The connection string is resolved from ``location`` (env var first, fallback path second).
    With ``cache_connection_string=True`` it is resolved once and kept for the lifetime of the
    instance; with ``False`` it is re-resolved on every call, so tests can point the env var at a
    different file between calls.

    ``log_error`` receives a formatted message for every connection failure. It runs inline, so
    it must not block.
    """

    def __init__(
        self,
        location: DatabaseLocation,
        cache_connection_string: bool = True,
        log_error: Optional[Callable[[str], None]] = None,
    ):
        self.location = location
        self.cache_connection_string = cache_connection_string
        self._cached_connection_string: Optional[str] = None
        self._log_error = log_error

    # ── error sink ────────────────────────────────────────

    @property
    def log_error(self) -> Callable[[str], None]:
        return self._log_error or _noop_log

    @log_error.setter
    def log_error(self, func: Optional[Callable[[str], None]]) -> None:
        self._log_error = func

    # ── connection settings ───────────────────────────────

    @property
    def connection_string(self) -> str:
        if not self.cache_connection_string:
            self._cached_connection_string = None
        if self._cached_connection_string is None:
            # concurrent first resolution is harmless: same value, makedirs is idempotent
            self._cached_connection_string = resolve(self.location)
        return self._cached_connection_string

    # ── raw SQL ───────────────────────────────────────────

    def execute_non_query(self, sql: str, params: Params = None) -> int:
        """Run a command with no result set; returns the number of affected rows (0 for DDL)."""
        return self._execute(sql, params, lambda cur: max(cur.rowcount, 0))

    def execute_scalar(self, sql: str, params: Params = None) -> Any:
        """First column of the first row, or None when the command returns no rows."""

        def _first(cur: sqlite3.Cursor) -> Any:
            row = cur.fetchone()
            return row[0] if row is not None else None

        return self._execute(sql, params, _first)

    def get_table(self, sql: str, params: Params = None) -> List[Row]:
        """All rows of a query as dicts, in the order SQLite returned them."""
        return self._execute(sql, params, lambda cur: [dict(r) for r in cur.fetchall()])

    def _execute(self, sql: str, params: Params, project: Callable[[sqlite3.Cursor], T]) -> T:
        bound = _bind_params(params)
        connection_string = self._cached_connection_string
        try:
            connection_string = self.connection_string
            with get_conn(connection_string) as conn:
                try:
                    logger.debug("execute [%s] params=%s", sql, bound)
                    cur = conn.execute(sql) if bound is None else conn.execute(sql, bound)
                    return project(cur)
                except Exception as e:
                    logger.warning("content error for [%s]: %s", sql, e)
                    raise DatabaseContentError(
                        f"Error operating on database data with command [{sql}].", sql
                    ) from e
        except DatabaseContentError:
            raise
        except Exception as e:
            # path resolution may have failed before a connection string existed
            target = connection_string or candidate_db_path(self.location)
            message = (
                f"Error registered in connecting to the SQLite database at [{target}] "
                f"for query [{sql}]."
            )
            if self._log_error is None:
                logger.error("%s %s", message, e)
            else:
                self.log_error(f"{message}  Error exception:{os.linesep}{e!r}")
            raise DatabaseConnectionError(message, target, sql) from e

    # ── generic table management ──────────────────────────

    def get_all_table_names(self) -> List[str]:
        """User table names from the schema catalog, ordered by name."""
        return [r["name"] for r in self.get_table(_LIST_TABLES_SQL)]

    def table_exists(self, table: str) -> bool:
        return table in self.get_all_table_names()

    def clear_table(self, table: str) -> None:
        """Delete every row of ``table`` but keep the table; unknown tables are skipped silently."""
        # not atomic: a concurrent DROP between the check and the DELETE surfaces as a content error
        if self.table_exists(table):
            self.execute_non_query(f"DELETE FROM {_quote_identifier(table)}")

    def clear_db(self) -> None:
        """Drop every user table."""
        for table in self.get_all_table_names():
            self.execute_non_query(f"DROP TABLE IF EXISTS {_quote_identifier(table)}")

    def value_exists_in_column(self, table: str, column: str, value: str) -> bool:
        """
        True if some row of ``table`` has ``column = value``.

        Raises InvalidArgumentError (a ValueError) for a None argument before touching the
        database; an unknown table or column is reported by SQLite and surfaces as
        DatabaseContentError.
        """
        if table is None:
            raise InvalidArgumentError("table string provided was None.")
        if column is None:
            raise InvalidArgumentError("column string provided was None.")
        if value is None:
            raise InvalidArgumentError("value string provided was None.")

        qt = _quote_identifier(table)
        # qualified column: an unknown name is an error, never a double-quoted string literal
        sql = f"SELECT COUNT(1) FROM {qt} WHERE {qt}.{_quote_identifier(column)} = :value"
        return int(self.execute_scalar(sql, {"value": value}) or 0) != 0

    # short names
    run_command = execute_non_query
    run_scalar = execute_scalar
    run_query = get_table
    list_tables = get_all_table_names
    clear_all_tables = clear_db
    value_exists = value_exists_in_column
