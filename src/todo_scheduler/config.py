# src/todo_scheduler/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Sensible defaults: `todo-scheduler` with no environment serves on :7540 from ./scheduler.db.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

DEFAULT_PORT = 7540
DEFAULT_TASKS_LIMIT = 10


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_port(name: str, default: int) -> int:
    # Accept both "7540" and the listen-address form ":7540".
    raw = (os.getenv(name) or "").strip().lstrip(":")
    if not raw:
        return default
    try:
        port = int(raw)
    except ValueError:
        return default
    return port if 0 < port < 65536 else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- HTTP ----
    host: str
    port: int
    web_dir: Path

    # ---- Storage ----
    db_file: Path
    tasks_limit: int

    # ---- Local data paths (ignored by git) ----
    data_dir: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-scheduler") or "todo-scheduler"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        host = _env(_k("HOST"), "0.0.0.0") or "0.0.0.0"
        port = _env_port(_k("PORT"), DEFAULT_PORT)
        web_dir = _env_path(_k("WEB_DIR"), Path("web"))

        db_file = _env_path(_k("DBFILE"), Path("scheduler.db"))
        tasks_limit = _env_int(_k("TASKS_LIMIT"), DEFAULT_TASKS_LIMIT)
        if tasks_limit < 1:
            tasks_limit = DEFAULT_TASKS_LIMIT

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            host=host,
            port=port,
            web_dir=web_dir,
            db_file=db_file,
            tasks_limit=tasks_limit,
            data_dir=data_dir,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
