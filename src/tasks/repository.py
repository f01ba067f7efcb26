from __future__ import annotations

import sqlite3
from typing import List, Optional

from .models import Task, TaskDraft


class TaskRepository:
    """Single-statement SQL operations on the ``tasks`` table.

    The connection is injected; every method runs one statement inside its
    own transaction and lets ``sqlite3.Error`` propagate.
    """

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def initialize(self) -> None:
        with self._conn:
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT,
                    description TEXT,
                    category TEXT
                )
                """
            )

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=row["id"],
            name=row["name"],
            description=row["description"] if row["description"] is not None else "",
            category=row["category"],
        )

    def get_all_tasks(self) -> List[Task]:
        with self._conn:
            rows = self._conn.execute("SELECT * FROM tasks").fetchall()
        return [self._row_to_task(row) for row in rows]

    def get_tasks_by_category(self, category: str) -> List[Task]:
        with self._conn:
            rows = self._conn.execute(
                "SELECT * FROM tasks WHERE category = ?", (category,)
            ).fetchall()
        return [self._row_to_task(row) for row in rows]

    def get_task(self, task_id: int) -> Optional[Task]:
        with self._conn:
            row = self._conn.execute(
                "SELECT * FROM tasks WHERE id = ?", (task_id,)
            ).fetchone()
        return self._row_to_task(row) if row else None

    def add_task(self, task: Task | TaskDraft) -> Task:
        with self._conn:
            cursor = self._conn.execute(
                "INSERT INTO tasks (name, description, category) VALUES (?, ?, ?)",
                (task.name, task.description, task.category),
            )
        return Task(
            id=cursor.lastrowid,
            name=task.name,
            description=task.description,
            category=task.category,
        )

    def update_task(self, task: Task) -> int:
        """Rewrite name and description. The stored category is left as is."""
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE tasks SET name = ?, description = ? WHERE id = ?",
                (task.name, task.description, task.id),
            )
        return cursor.rowcount

    def delete_task(self, task_id: int) -> int:
        with self._conn:
            cursor = self._conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        return cursor.rowcount

    def delete_tasks_by_category(self, category: str) -> int:
        with self._conn:
            cursor = self._conn.execute(
                "DELETE FROM tasks WHERE category = ?", (category,)
            )
        return cursor.rowcount
