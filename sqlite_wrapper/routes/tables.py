from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ..database import SQLiteDatabase
from . import get_database

router = APIRouter()


@router.get("/api/tables")
def api_tables_list(db: SQLiteDatabase = Depends(get_database)):
    return {"items": db.get_all_table_names()}


@router.post("/api/tables/clear-all")
def api_tables_clear_all(db: SQLiteDatabase = Depends(get_database)):
    db.clear_db()
    return {"message": "ok"}


@router.post("/api/tables/{table}/clear")
def api_table_clear(table: str, db: SQLiteDatabase = Depends(get_database)):
    db.clear_table(table)
    return {"message": "ok"}


@router.get("/api/tables/{table}/exists")
def api_table_value_exists(
    table: str,
    column: Optional[str] = None,
    value: Optional[str] = None,
    db: SQLiteDatabase = Depends(get_database),
):
    # missing column/value reach value_exists_in_column as None -> ValueError -> 422
    return {"exists": db.value_exists_in_column(table, column, value)}
