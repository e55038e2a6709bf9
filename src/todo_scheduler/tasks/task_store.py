# src/todo_scheduler/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from ..core.errors import StoreError
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection

    Every sqlite3.Error is re-raised as StoreError.
    """

    def __init__(self, db_path: str | Path = "scheduler.db") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except StoreError:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _connect(self, op: str) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._get_conn()
        except sqlite3.Error as exc:
            logger.exception("TaskStore %s: cannot open db=%s", op, self._db_path)
            raise StoreError(f"cannot open task database: {exc}") from exc
        try:
            yield conn
        except sqlite3.Error as exc:
            logger.exception("TaskStore %s failed", op)
            raise StoreError(f"{op} failed: {exc}") from exc
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connect("ensure_schema") as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS scheduler (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    date CHAR(8) NOT NULL,
                    title VARCHAR(255) NOT NULL,
                    comment TEXT NOT NULL DEFAULT '',
                    repeat VARCHAR(128) NOT NULL DEFAULT ''
                )
                """
            )

            # Migrations (safe): databases created by older builds may lack these.
            cur.execute("PRAGMA table_info(scheduler)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE scheduler ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("comment", "TEXT NOT NULL DEFAULT ''")
            add_col("repeat", "VARCHAR(128) NOT NULL DEFAULT ''")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_scheduler_date ON scheduler(date)")

            conn.commit()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            date=str(row["date"] or ""),
            title=str(row["title"] or ""),
            comment=str(row["comment"] or ""),
            repeat=str(row["repeat"] or ""),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._connect("count_tasks") as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM scheduler").fetchone()
            return int(n)

    def add_task(self, task: Task) -> int:
        with self._connect("add_task") as conn:
            cur = conn.execute(
                "INSERT INTO scheduler(date, title, comment, repeat) VALUES (?, ?, ?, ?)",
                (task.date, task.title, task.comment, task.repeat),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StoreError("SQLite did not return lastrowid for scheduler insert")
            task_id = int(rowid)
            logger.debug("Task added id=%s date=%s repeat=%r", task_id, task.date, task.repeat)
            return task_id

    def get_task(self, task_id: int) -> Task | None:
        with self._connect("get_task") as conn:
            row = conn.execute(
                "SELECT id, date, title, comment, repeat FROM scheduler WHERE id = ?",
                (int(task_id),),
            ).fetchone()
            return self._row_to_task(row) if row else None

    def list_tasks(self, *, limit: int = 10) -> list[Task]:
        """Upcoming tasks, earliest date first."""
        with self._connect("list_tasks") as conn:
            rows = conn.execute(
                """
                SELECT id, date, title, comment, repeat
                FROM scheduler
                ORDER BY date ASC, id ASC
                    LIMIT ?
                """,
                (int(limit),),
            ).fetchall()
            return [self._row_to_task(r) for r in rows]

    def update_task(self, task: Task) -> bool:
        """Overwrite all mutable fields. Returns False if no row has this id."""
        if task.id is None:
            return False
        with self._connect("update_task") as conn:
            cur = conn.execute(
                "UPDATE scheduler SET date = ?, title = ?, comment = ?, repeat = ? WHERE id = ?",
                (task.date, task.title, task.comment, task.repeat, int(task.id)),
            )
            conn.commit()
            return cur.rowcount == 1

    def update_task_date(self, task_id: int, new_date: str) -> bool:
        with self._connect("update_task_date") as conn:
            cur = conn.execute(
                "UPDATE scheduler SET date = ? WHERE id = ?",
                (new_date, int(task_id)),
            )
            conn.commit()
            return cur.rowcount == 1

    def delete_task(self, task_id: int) -> bool:
        with self._connect("delete_task") as conn:
            cur = conn.execute("DELETE FROM scheduler WHERE id = ?", (int(task_id),))
            conn.commit()
            deleted = cur.rowcount == 1
            if deleted:
                logger.debug("Task deleted id=%s", task_id)
            return deleted
