from __future__ import annotations

import base64
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..database import SQLiteDatabase
from . import get_database

router = APIRouter()


class SqlCommand(BaseModel):
    sql: str
    params: Optional[Dict[str, Any]] = None


def _json_value(v: Any) -> Any:
    # BLOB columns come back as bytes; ship them base64-encoded
    if isinstance(v, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(v)).decode("ascii")
    return v


@router.post("/api/sql/execute")
def api_sql_execute(cmd: SqlCommand, db: SQLiteDatabase = Depends(get_database)):
    return {"rowcount": db.execute_non_query(cmd.sql, cmd.params)}


@router.post("/api/sql/scalar")
def api_sql_scalar(cmd: SqlCommand, db: SQLiteDatabase = Depends(get_database)):
    return {"value": _json_value(db.execute_scalar(cmd.sql, cmd.params))}


@router.post("/api/sql/query")
def api_sql_query(cmd: SqlCommand, db: SQLiteDatabase = Depends(get_database)):
    rows = db.get_table(cmd.sql, cmd.params)
    return {"items": [{k: _json_value(v) for k, v in r.items()} for r in rows]}
