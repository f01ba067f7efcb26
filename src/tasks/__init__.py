"""Task persistence and screen controllers shared by the API and the CLI."""

from .controller import CategoryController, Modal, ModalState, TaskListController, derive_categories
from .exceptions import StoreClosedError, StoreError, TaskError, TaskValidationError
from .models import Task, TaskDraft
from .repository import TaskRepository
from .store import TaskStore

__all__ = [
    "CategoryController",
    "Modal",
    "ModalState",
    "StoreClosedError",
    "StoreError",
    "Task",
    "TaskDraft",
    "TaskError",
    "TaskListController",
    "TaskRepository",
    "TaskStore",
    "TaskValidationError",
    "derive_categories",
]
