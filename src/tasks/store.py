"""Asynchronous task store.

Every operation is queued on a single worker thread and reports its outcome
through an optional pair of continuations and a ``concurrent.futures.Future``.
Statements run one at a time in submission order against one connection.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

from .database import open_database, resolve_db_path
from .exceptions import StoreClosedError, StoreError
from .models import Task, TaskDraft
from .repository import TaskRepository

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[StoreError], None]


@dataclass
class _PendingWrite:
    future: Future
    key: Optional[Hashable]
    callbacks: List[Tuple[Optional[SuccessCallback], Optional[ErrorCallback]]] = field(
        default_factory=list
    )


class TaskStore:
    """Owns the task database handle and serializes access to it."""

    def __init__(self, db_path: Optional[Path | str] = None) -> None:
        self.db_path = resolve_db_path(db_path)
        self._lock = threading.Lock()
        self._conn: Optional[sqlite3.Connection] = None
        self._repo: Optional[TaskRepository] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending: Dict[Hashable, _PendingWrite] = {}

    # lifecycle

    def open(self) -> "TaskStore":
        with self._lock:
            if self._executor is not None:
                return self
            self._conn = open_database(self.db_path)
            self._repo = TaskRepository(self._conn)
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="task-store"
            )
        return self

    def close(self) -> None:
        """Drain queued statements and release the connection."""
        with self._lock:
            executor = self._executor
            conn = self._conn
            self._executor = None
        if executor is None:
            return
        executor.shutdown(wait=True)
        with self._lock:
            self._repo = None
            self._conn = None
        if conn is not None:
            conn.close()
        logger.info("Closed task database: %s", self.db_path)

    @property
    def is_open(self) -> bool:
        with self._lock:
            return self._executor is not None

    def __enter__(self) -> "TaskStore":
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # operations

    def initialize(
        self,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> Future:
        """Create the tasks table if it does not exist yet."""
        return self._submit(
            "initialize", lambda repo: repo.initialize(), on_success, on_error
        )

    def get_all_tasks(
        self,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> Future:
        return self._submit(
            "get_all_tasks", lambda repo: repo.get_all_tasks(), on_success, on_error
        )

    def get_tasks_by_category(
        self,
        category: str,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> Future:
        return self._submit(
            "get_tasks_by_category",
            lambda repo: repo.get_tasks_by_category(category),
            on_success,
            on_error,
        )

    def get_task(
        self,
        task_id: int,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> Future:
        return self._submit(
            "get_task", lambda repo: repo.get_task(task_id), on_success, on_error
        )

    def add_task(
        self,
        task: Task | TaskDraft,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> Future:
        """Insert a task. Callers validate the fields beforehand.

        Every call inserts a new row; repeated submits are guarded by the caller.
        """
        return self._submit(
            "add_task", lambda repo: repo.add_task(task), on_success, on_error
        )

    def update_task(
        self,
        task: Task,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> Future:
        """Rewrite name and description of ``task.id``; ``task.category`` is ignored."""
        return self._submit(
            "update_task",
            lambda repo: repo.update_task(task),
            on_success,
            on_error,
            entity=("task", task.id),
            key=("update", task.name, task.description),
        )

    def delete_task(
        self,
        task_id: int,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> Future:
        return self._submit(
            "delete_task",
            lambda repo: repo.delete_task(task_id),
            on_success,
            on_error,
            entity=("task", task_id),
            key=("delete",),
        )

    def delete_tasks_by_category(
        self,
        category: str,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> Future:
        return self._submit(
            "delete_tasks_by_category",
            lambda repo: repo.delete_tasks_by_category(category),
            on_success,
            on_error,
            entity=("category", category),
            key=("delete_category",),
        )

    # internals

    def _submit(
        self,
        operation: str,
        action: Callable[[TaskRepository], Any],
        on_success: Optional[SuccessCallback],
        on_error: Optional[ErrorCallback],
        entity: Optional[Hashable] = None,
        key: Optional[Hashable] = None,
    ) -> Future:
        with self._lock:
            latest = self._pending.get(entity) if entity is not None else None
            if latest is not None and latest.key == key:
                # Only the newest queued write of an entity absorbs repeats.
                latest.callbacks.append((on_success, on_error))
                logger.debug("Coalesced duplicate %s for %r", operation, entity)
                return latest.future

            write = _PendingWrite(future=Future(), key=key, callbacks=[(on_success, on_error)])
            executor = self._executor
            error: Optional[StoreError] = None
            if executor is None:
                error = StoreClosedError(operation)
            else:
                if entity is not None:
                    self._pending[entity] = write
                executor.submit(self._run, operation, action, write, entity)

        if error is not None:
            self._fail(operation, write.future, error, write.callbacks)
        return write.future

    def _run(
        self,
        operation: str,
        action: Callable[[TaskRepository], Any],
        write: _PendingWrite,
        entity: Optional[Hashable],
    ) -> None:
        logger.debug("Running %s", operation)
        try:
            if self._repo is None:
                raise StoreClosedError(operation)
            result = action(self._repo)
        except StoreError as exc:
            self._fail(operation, write.future, exc, self._release(write, entity))
            return
        except Exception as exc:
            self._fail(
                operation,
                write.future,
                StoreError(operation, exc),
                self._release(write, entity),
            )
            return

        for success, _ in self._release(write, entity):
            if success is not None:
                self._invoke(operation, success, result)
        write.future.set_result(result)

    def _release(
        self, write: _PendingWrite, entity: Optional[Hashable]
    ) -> List[Tuple[Optional[SuccessCallback], Optional[ErrorCallback]]]:
        with self._lock:
            if entity is not None and self._pending.get(entity) is write:
                del self._pending[entity]
            return list(write.callbacks)

    def _fail(
        self,
        operation: str,
        future: Future,
        error: StoreError,
        callbacks: List[Tuple[Optional[SuccessCallback], Optional[ErrorCallback]]],
    ) -> None:
        logger.error("Task store error: %s", error)
        for _, failure in callbacks:
            if failure is not None:
                self._invoke(operation, failure, error)
        future.set_exception(error)

    @staticmethod
    def _invoke(operation: str, callback: Callable[[Any], None], value: Any) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception("Continuation for %s raised", operation)
