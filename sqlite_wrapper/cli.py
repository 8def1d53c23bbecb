#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SQLite wrapper command line.

Commands:
  tables              List user tables
  clear-table NAME    Delete every row of a table (unknown tables are skipped)
  clear-db            Drop every user table
  exists T C V        Does value V appear in column C of table T
  query SQL           Run a query and print all rows
  scalar SQL          Run a command and print the first value
  exec SQL            Run a command and print the affected row count

Usage:
  python -m sqlite_wrapper.cli --config config.yaml query "SELECT * FROM t WHERE a=@a" --param a=1
"""
from __future__ import annotations

import argparse
import json
import sys

from .errors import DatabaseError
from .settings import default_database, load_settings


def _parse_params(raw: list[str] | None) -> dict:
    params = {}
    for item in raw or []:
        name, sep, value = item.partition("=")
        if not sep:
            raise ValueError(f"--param expects name=value, got [{item}]")
        params[name] = value
    return params


def _print(obj) -> None:
    print(json.dumps(obj, ensure_ascii=False, default=str))


def cmd_tables(db, args):
    _print(db.get_all_table_names())


def cmd_clear_table(db, args):
    db.clear_table(args.name)
    _print({"message": "ok"})


def cmd_clear_db(db, args):
    db.clear_db()
    _print({"message": "ok"})


def cmd_exists(db, args):
    _print({"exists": db.value_exists_in_column(args.table, args.column, args.value)})


def cmd_query(db, args):
    _print(db.get_table(args.sql, _parse_params(args.param)))


def cmd_scalar(db, args):
    _print({"value": db.execute_scalar(args.sql, _parse_params(args.param))})


def cmd_exec(db, args):
    _print({"rowcount": db.execute_non_query(args.sql, _parse_params(args.param))})


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="SQLite wrapper")
    parser.add_argument("--config", default=None, help="config.yaml path")
    sub = parser.add_subparsers()

    p_tables = sub.add_parser("tables", help="list user tables")
    p_tables.set_defaults(func=cmd_tables)

    p_clear = sub.add_parser("clear-table", help="delete all rows of a table")
    p_clear.add_argument("name")
    p_clear.set_defaults(func=cmd_clear_table)

    p_clear_db = sub.add_parser("clear-db", help="drop every table")
    p_clear_db.set_defaults(func=cmd_clear_db)

    p_exists = sub.add_parser("exists", help="check whether a value exists in a column")
    p_exists.add_argument("table")
    p_exists.add_argument("column")
    p_exists.add_argument("value")
    p_exists.set_defaults(func=cmd_exists)

    for name, func, help_text in (
        ("query", cmd_query, "run a query, print all rows"),
        ("scalar", cmd_scalar, "run a command, print the first value"),
        ("exec", cmd_exec, "run a command, print affected rows"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("sql")
        p.add_argument("--param", action="append", help="name=value, repeatable")
        p.set_defaults(func=func)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    db = default_database(load_settings(args.config))
    try:
        args.func(db, args)
    except (DatabaseError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
