"""Task management exceptions.

Two kinds of failure exist: validation errors, raised before the store is
ever touched, and store errors, reported by the SQLite engine.
"""

from __future__ import annotations


class TaskError(Exception):
    """Base exception for task management."""

    pass


class TaskValidationError(TaskError):
    """A required field is missing."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class StoreError(TaskError):
    """A statement failed inside the task store."""

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        detail = f"{operation} failed"
        if cause is not None:
            detail = f"{detail}: {cause}"
        super().__init__(detail)
        self.operation = operation
        self.cause = cause


class StoreClosedError(StoreError):
    """The store was used before open() or after close()."""

    pass
