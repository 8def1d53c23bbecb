from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

import yaml

from .database import SQLiteDatabase
from .db import DatabaseLocation

# config.yaml lookup: SQLITE_WRAPPER_CONFIG env var, else ./config.yaml
CONFIG_ENV_VAR = "SQLITE_WRAPPER_CONFIG"
DEFAULT_CONFIG_PATH = "config.yaml"

DEFAULTS = {
    "env_var": "SQLITE_WRAPPER_DB_PATH",
    "db_path": os.path.join("data", "sqlite_wrapper.db"),
    "cache_connection_string": True,
}


@dataclass(frozen=True)
class Settings:
    env_var: str
    db_path: str
    cache_connection_string: bool = True

    @property
    def location(self) -> DatabaseLocation:
        return DatabaseLocation(self.env_var, self.db_path)


def _read_config_yaml(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in ("env_var", "db_path"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    if isinstance(cfg.get("cache_connection_string"), bool):
        out["cache_connection_string"] = cfg["cache_connection_string"]
    return out


def load_settings(path: Optional[str] = None) -> Settings:
    cfg_path = path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    cfg = {**DEFAULTS, **_read_config_yaml(cfg_path)}
    return Settings(
        env_var=cfg["env_var"],
        db_path=cfg["db_path"],
        cache_connection_string=cfg["cache_connection_string"],
    )


def default_database(settings: Optional[Settings] = None) -> SQLiteDatabase:
    """The configured database, with connection failures also sent to the package logger."""
    s = settings or load_settings()
    return SQLiteDatabase(
        s.location,
        cache_connection_string=s.cache_connection_string,
        log_error=logging.getLogger("sqlite_wrapper").error,
    )
