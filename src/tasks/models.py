from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(slots=True)
class Task:
    """Persisted task row."""

    id: int
    name: str
    description: str
    category: str  # free-text grouping label, not a separate entity

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class TaskDraft:
    """User input for a task that has not been saved yet."""

    name: str = ""
    description: str = ""
    category: str = ""
