"""
FastAPI app exposing the table helpers and raw SQL over HTTP.
Keep as `uvicorn sqlite_wrapper.api:app`.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .errors import DatabaseConnectionError, DatabaseContentError, InvalidArgumentError

APP_NAME = "sqlite-wrapper-api"

app = FastAPI(title=APP_NAME, version=__version__)


@app.exception_handler(DatabaseContentError)
def _content_error(request: Request, exc: DatabaseContentError):
    return JSONResponse(status_code=400, content={"detail": str(exc), "cause": str(exc.__cause__)})


@app.exception_handler(DatabaseConnectionError)
def _connection_error(request: Request, exc: DatabaseConnectionError):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(InvalidArgumentError)
def _invalid_argument(request: Request, exc: InvalidArgumentError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# Include routers
from .routes import base as base_routes
from .routes import tables as tables_routes
from .routes import sql as sql_routes

app.include_router(base_routes.router)
app.include_router(tables_routes.router)
app.include_router(sql_routes.router)
