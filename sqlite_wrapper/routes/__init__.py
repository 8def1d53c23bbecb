"""HTTP routers, split by concern. Handlers get the database through ``get_database``."""
from __future__ import annotations

from functools import lru_cache

from ..database import SQLiteDatabase
from ..settings import default_database


@lru_cache(maxsize=1)
def get_database() -> SQLiteDatabase:
    return default_database()
