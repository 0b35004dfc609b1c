# src/task_manager/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Iterable, Iterator
from dataclasses import replace
from datetime import date
from pathlib import Path

from ..core.errors import PersistenceError
from .task_models import Priority, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Every sqlite3 error surfaces as PersistenceError.
    Each method opens its own SQLite connection.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

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
    def _connect(self, action: str) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            logger.warning("TaskStore %s failed to open db=%s: %s", action, self._db_path, e)
            raise PersistenceError(str(e)) from e
        try:
            yield conn
        except sqlite3.Error as e:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            logger.warning("TaskStore %s failed: %s", action, e)
            raise PersistenceError(str(e)) from e
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connect("schema") as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL DEFAULT '',
                    description TEXT NOT NULL DEFAULT '',
                    priority INTEGER NOT NULL DEFAULT 0,
                    due_date TEXT,
                    is_completed INTEGER NOT NULL DEFAULT 0,
                    display_order INTEGER NOT NULL DEFAULT 0,
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

            add_col("title", "TEXT NOT NULL DEFAULT ''")
            add_col("description", "TEXT NOT NULL DEFAULT ''")
            add_col("priority", "INTEGER NOT NULL DEFAULT 0")
            add_col("due_date", "TEXT")
            add_col("is_completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("display_order", "INTEGER NOT NULL DEFAULT 0")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_order ON tasks(display_order, due_date)")

            conn.commit()

    @staticmethod
    def _date_to_str(d: date | None) -> str | None:
        return d.isoformat() if d is not None else None

    @staticmethod
    def _str_to_date(s: str | None) -> date | None:
        if not s:
            return None
        try:
            return date.fromisoformat(s[:10])
        except ValueError:
            logger.debug("Unparseable due_date %r; treating as no due date.", s)
            return None

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            description=str(row["description"] or ""),
            priority=Priority.from_db(row["priority"]),
            due_date=self._str_to_date(row["due_date"]),
            is_completed=bool(row["is_completed"]),
            display_order=int(row["display_order"] or 0),
            created_at=float(row["created_at"] or 0.0),
            updated_at=float(row["updated_at"] or 0.0),
        )

    def _update_row(self, cur: sqlite3.Cursor, task: Task, now: float) -> None:
        if task.id is None:
            raise PersistenceError("Cannot update a task that was never inserted")
        cur.execute(
            """
            UPDATE tasks
            SET title = ?, description = ?, priority = ?, due_date = ?,
                is_completed = ?, display_order = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                task.title,
                task.description,
                int(task.priority),
                self._date_to_str(task.due_date),
                int(task.is_completed),
                int(task.display_order),
                now,
                int(task.id),
            ),
        )
        if cur.rowcount != 1:
            raise PersistenceError(f"Task id={task.id} not found")

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._connect("count") as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def fetch_all(self) -> list[Task]:
        """All tasks, in the store's native order: display_order, then due date."""
        with self._connect("fetch") as conn:
            rows = conn.execute(
                "SELECT * FROM tasks ORDER BY display_order ASC, due_date ASC, id ASC"
            ).fetchall()
            return [self._row_to_task(r) for r in rows]

    def get_task(self, task_id: int) -> Task | None:
        with self._connect("get") as conn:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),)).fetchone()
            return self._row_to_task(row) if row else None

    def max_display_order(self) -> int:
        """Highest display_order in the store, or -1 when empty."""
        with self._connect("max_display_order") as conn:
            (n,) = conn.execute("SELECT MAX(display_order) FROM tasks").fetchone()
            return int(n) if n is not None else -1

    def insert(self, task: Task) -> Task:
        now = time.time()
        with self._connect("insert") as conn:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO tasks(
                    title, description, priority, due_date,
                    is_completed, display_order, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    task.title,
                    task.description,
                    int(task.priority),
                    self._date_to_str(task.due_date),
                    int(task.is_completed),
                    int(task.display_order),
                    now,
                    now,
                ),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise PersistenceError("SQLite did not return lastrowid for tasks insert")
            logger.debug("Task inserted id=%s order=%s", rowid, task.display_order)
            return replace(task, id=int(rowid), created_at=now, updated_at=now)

    def update(self, task: Task) -> None:
        self.update_many([task])

    def update_many(self, tasks: Iterable[Task]) -> None:
        """Write all tasks in one transaction: either every row is updated or none."""
        items = list(tasks)
        if not items:
            return
        now = time.time()
        with self._connect("update") as conn:
            cur = conn.cursor()
            try:
                for task in items:
                    self._update_row(cur, task, now)
            except PersistenceError:
                conn.rollback()
                raise
            conn.commit()
            logger.debug("Tasks updated ids=%s", [t.id for t in items])

    def delete(self, task: Task) -> None:
        if task.id is None:
            raise PersistenceError("Cannot delete a task that was never inserted")
        with self._connect("delete") as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task.id),))
            conn.commit()
            if cur.rowcount != 1:
                raise PersistenceError(f"Task id={task.id} not found")
            logger.debug("Task deleted id=%s", task.id)
