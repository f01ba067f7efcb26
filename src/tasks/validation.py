"""Input checks that run before anything reaches the store."""

from __future__ import annotations

from .exceptions import TaskValidationError
from .models import Task, TaskDraft


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_new_task(draft: TaskDraft, require_category: bool = True) -> None:
    """Raise TaskValidationError unless the draft has a name (and a category).

    Values are checked trimmed but stored exactly as entered. The category
    screen passes ``require_category=False`` because its drafts carry the
    screen's own category.
    """
    if _is_blank(draft.name):
        message = "Task name and category are required." if require_category else "Task name is required."
        raise TaskValidationError("name", message)
    if require_category and _is_blank(draft.category):
        raise TaskValidationError("category", "Task name and category are required.")


def validate_task_edit(task: Task) -> None:
    if _is_blank(task.name):
        raise TaskValidationError("name", "Task name is required.")
