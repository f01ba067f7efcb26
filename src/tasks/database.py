"""SQLite handle helpers for the task store."""

from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DB_PATH_ENV = "TASKYMINDER_DB_PATH"


def resolve_db_path(db_path: Optional[Path | str] = None) -> Path:
    """Pick the database file: explicit argument, then environment, then data/tasks.db."""
    root = Path(__file__).resolve().parents[2]
    default_path = root / "data" / "tasks.db"
    env_path = os.getenv(DB_PATH_ENV)
    if db_path:
        return Path(db_path)
    if env_path:
        return Path(env_path)
    return default_path


def open_database(db_path: Path | str) -> sqlite3.Connection:
    """Open the single connection shared by every task operation.

    The caller owns the returned connection and is responsible for closing it.
    ``check_same_thread`` is disabled because the store hands the connection
    to its worker thread.
    """
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    logger.info("Opened task database: %s", path)
    return conn
