import sys
import uuid
from pathlib import Path

import pytest

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from sqlite_wrapper.database import SQLiteDatabase
from sqlite_wrapper.db import DatabaseLocation

TEST_ENV_VAR = "SQLITE_WRAPPER_TEST_DB_PATH"

CREATE_EXAMPLE_TABLE_SQL = (
    "CREATE TABLE IF NOT EXISTS 'testing' (BLAH TEXT, BLEH TEXT, BLEE TEXT, PRIMARY KEY (BLAH));"
)
INSERT_EXAMPLE_ROW_SQL = "INSERT INTO testing(BLAH, BLEH, BLEE) VALUES(@param0, @param1, @param2);"
EXAMPLE_ROWS = [("a", "b", "c"), ("d", "e", "f"), ("h", "i", "j")]


def insert_params(x, y, z):
    return [("@param0", x), ("@param1", y), ("@param2", z)]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # never let a developer's real env var leak into tests
    monkeypatch.delenv(TEST_ENV_VAR, raising=False)
    monkeypatch.delenv("ignoring_this", raising=False)


@pytest.fixture()
def tmp_db_path(tmp_path):
    return str(tmp_path / "db" / f"SQLite_unittest_{uuid.uuid4()}.db3")


@pytest.fixture()
def empty_db(tmp_db_path):
    """A new temporary database addressed through its fallback path."""
    return SQLiteDatabase(DatabaseLocation("ignoring_this", tmp_db_path))


@pytest.fixture()
def populated_db(empty_db):
    """
    Temporary database with example data:

    TableName: testing
    | BLAH | BLEH | BLEE |
    |   a  |   b  |   c  |
    |   d  |   e  |   f  |
    |   h  |   i  |   j  |
    """
    empty_db.execute_non_query(CREATE_EXAMPLE_TABLE_SQL)
    for row in EXAMPLE_ROWS:
        empty_db.execute_non_query(INSERT_EXAMPLE_ROW_SQL, insert_params(*row))
    return empty_db


@pytest.fixture()
def client(populated_db):
    from fastapi.testclient import TestClient
    from sqlite_wrapper.api import app
    from sqlite_wrapper.routes import get_database

    app.dependency_overrides[get_database] = lambda: populated_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
