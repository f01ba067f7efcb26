"""Screen controllers for the task list and a single category.

Controllers hold the lists currently on display and never patch them in
place: after every successful mutation they re-query the store and replace
their state with the result.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import replace
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from .exceptions import StoreError
from .models import Task, TaskDraft
from .store import TaskStore
from .validation import validate_new_task, validate_task_edit

logger = logging.getLogger(__name__)


def derive_categories(tasks: Iterable[Task]) -> List[str]:
    """Distinct category labels in first-seen order."""
    return list(dict.fromkeys(task.category for task in tasks))


class ModalState(str, Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


class Modal:
    """Two-state dialog holding the draft being edited."""

    def __init__(self, draft_factory: Callable[[], Any]) -> None:
        self._draft_factory = draft_factory
        self.state = ModalState.HIDDEN
        self.draft: Any = draft_factory()
        # completion future of the save in flight, if any
        self.saving: Optional[Future] = None

    @property
    def is_visible(self) -> bool:
        return self.state is ModalState.VISIBLE

    def open(self, draft: Any = None) -> None:
        if draft is not None:
            self.draft = draft
        self.state = ModalState.VISIBLE

    def close(self) -> None:
        """Hide the dialog. Used for save, cancel and backdrop dismissal alike."""
        self.state = ModalState.HIDDEN

    def reset(self) -> None:
        self.draft = self._draft_factory()

    def update_draft(self, **fields: Any) -> None:
        if self.draft is None:
            raise RuntimeError("Modal has no draft to update")
        for name, value in fields.items():
            setattr(self.draft, name, value)


class _ScreenController:
    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._tasks: List[Task] = []
        self.last_error: Optional[StoreError] = None

    @property
    def tasks(self) -> List[Task]:
        with self._lock:
            return list(self._tasks)

    def start(self) -> Future:
        """Ensure the table exists, then load the screen's tasks."""
        self._store.initialize()
        return self.load_tasks()

    def load_tasks(self) -> Future:
        done: Future = Future()
        self._reload(done)
        return done

    def _fetch(self, on_success: Callable[[List[Task]], None], on_error: Callable[[StoreError], None]) -> None:
        raise NotImplementedError

    def _tasks_changed(self) -> None:
        pass

    def _reload(self, done: Future) -> None:
        self._fetch(
            lambda tasks: self._replace(tasks, done),
            lambda exc: self._failed(exc, done),
        )

    def _replace(self, tasks: List[Task], done: Future) -> None:
        with self._lock:
            self._tasks = list(tasks)
            self._tasks_changed()
            self.last_error = None
        logger.debug("Reloaded %d tasks", len(tasks))
        done.set_result(True)

    def _failed(self, exc: StoreError, done: Future) -> None:
        # Store errors are logged by the store; the displayed state stays as it was.
        with self._lock:
            self.last_error = exc
        done.set_result(False)

    def _mutate(
        self,
        call: Callable[..., Future],
        after: Optional[Callable[[], None]] = None,
        done: Optional[Future] = None,
    ) -> Future:
        if done is None:
            done = Future()

        def succeeded(_result: Any) -> None:
            if after is not None:
                after()
            self._reload(done)

        call(on_success=succeeded, on_error=lambda exc: self._failed(exc, done))
        return done

    def _save(self, modal: Modal, call: Callable[..., Future]) -> Future:
        """Save from a dialog, ignoring repeated submits until the first one completes."""
        with self._lock:
            if modal.saving is not None and not modal.saving.done():
                logger.debug("Save already pending; ignoring repeated submit")
                return modal.saving
            done: Future = Future()
            modal.saving = done

        def saved() -> None:
            modal.reset()
            modal.close()

        return self._mutate(call, after=saved, done=done)


class TaskListController(_ScreenController):
    """Home screen: every task, grouped into derived categories."""

    def __init__(self, store: TaskStore) -> None:
        super().__init__(store)
        self._categories: List[str] = []
        self.add_modal = Modal(TaskDraft)

    @property
    def categories(self) -> List[str]:
        with self._lock:
            return list(self._categories)

    def _fetch(self, on_success, on_error) -> None:
        self._store.get_all_tasks(on_success=on_success, on_error=on_error)

    def _tasks_changed(self) -> None:
        self._categories = derive_categories(self._tasks)

    def tasks_in_category(self, category: str) -> List[Task]:
        return [task for task in self.tasks if task.category == category]

    def open_add(self) -> None:
        self.add_modal.open()

    def cancel_add(self) -> None:
        self.add_modal.close()

    def submit_add(self) -> Future:
        """Validate the add form and save it.

        Raises:
            TaskValidationError: name or category is blank. The store is not called.
        """
        draft = replace(self.add_modal.draft)
        validate_new_task(draft)
        return self._save(
            self.add_modal,
            lambda **callbacks: self._store.add_task(draft, **callbacks),
        )

    def delete_category(self, category: str) -> Future:
        """Delete the category by deleting every task that carries its label."""
        return self._mutate(
            lambda **callbacks: self._store.delete_tasks_by_category(category, **callbacks)
        )


class CategoryController(_ScreenController):
    """Category screen: the tasks of one category, with add and edit dialogs."""

    def __init__(self, store: TaskStore, category: str) -> None:
        super().__init__(store)
        self.category = category
        self.add_modal = Modal(lambda: TaskDraft(category=category))
        self.edit_modal = Modal(lambda: None)

    def _fetch(self, on_success, on_error) -> None:
        self._store.get_tasks_by_category(
            self.category, on_success=on_success, on_error=on_error
        )

    def open_add(self) -> None:
        self.add_modal.open()

    def cancel_add(self) -> None:
        self.add_modal.close()

    def submit_add(self) -> Future:
        """Save the add form; only the name is required on this screen."""
        draft = replace(self.add_modal.draft)
        validate_new_task(draft, require_category=False)
        return self._save(
            self.add_modal,
            lambda **callbacks: self._store.add_task(draft, **callbacks),
        )

    def begin_edit(self, task: Task) -> None:
        self.edit_modal.open(replace(task))

    def cancel_edit(self) -> None:
        self.edit_modal.close()

    def save_edit(self) -> Future:
        """Save name and description of the task in the edit dialog.

        A category typed into the dialog is not persisted.
        """
        if self.edit_modal.draft is None:
            raise RuntimeError("No task is being edited")
        task = replace(self.edit_modal.draft)
        validate_task_edit(task)
        return self._save(
            self.edit_modal,
            lambda **callbacks: self._store.update_task(task, **callbacks),
        )

    def delete_task(self, task_id: int) -> Future:
        return self._mutate(
            lambda **callbacks: self._store.delete_task(task_id, **callbacks)
        )
