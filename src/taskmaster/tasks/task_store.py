# tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from datetime import datetime, timezone
from pathlib import Path

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
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    description TEXT,
                    completed INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("description", "TEXT")
            add_col("completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _ts_to_dt(ts: float | None) -> datetime:
        return datetime.fromtimestamp(float(ts or 0.0), tz=timezone.utc)

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"]),
            description=row["description"],
            completed=bool(row["completed"]),
            created_at=self._ts_to_dt(row["created_at"]),
            updated_at=self._ts_to_dt(row["updated_at"]),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def save(self, task: Task) -> Task:
        """
        Insert a new task (id is None) or overwrite the mutable fields of an
        existing one. Returns the row as stored.

        created_at is only ever written on insert; updated_at is refreshed on
        every save.
        """
        if not task.title or not task.title.strip():
            raise ValueError("title is required")

        if task.id is None:
            return self._insert(task)
        return self._update(task.id, task)

    def _insert(self, task: Task) -> Task:
        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO tasks(title, description, completed, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (task.title, task.description, int(bool(task.completed)), now, now),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
        finally:
            conn.close()

        logger.debug("Task inserted id=%s completed=%s", task_id, task.completed)
        return Task(
            id=task_id,
            title=task.title,
            description=task.description,
            completed=bool(task.completed),
            created_at=self._ts_to_dt(now),
            updated_at=self._ts_to_dt(now),
        )

    def _update(self, task_id: int, task: Task) -> Task:
        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                UPDATE tasks
                SET title = ?,
                    description = ?,
                    completed = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (task.title, task.description, int(bool(task.completed)), now, int(task_id)),
            )
            if cur.rowcount != 1:
                conn.rollback()
                raise LookupError(f"no task with id {task_id} to update")

            cur.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
            row = cur.fetchone()
            conn.commit()
        finally:
            conn.close()

        logger.debug("Task updated id=%s completed=%s", task_id, task.completed)
        return self._row_to_task(row)

    def find_by_id(self, task_id: int) -> Task | None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
            row = cur.fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def find_all(self) -> list[Task]:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks ORDER BY id ASC")
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def exists_by_id(self, task_id: int) -> bool:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT 1 FROM tasks WHERE id = ? LIMIT 1", (int(task_id),))
            return cur.fetchone() is not None
        finally:
            conn.close()

    def delete_by_id(self, task_id: int) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            conn.commit()
            logger.debug("Task delete id=%s rows=%s", task_id, cur.rowcount)
        finally:
            conn.close()

    def delete_all(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("DELETE FROM tasks")
            conn.commit()
            logger.debug("Tasks cleared rows=%s", cur.rowcount)
        finally:
            conn.close()
