"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

import asyncio
from concurrent.futures import Future
from functools import lru_cache
from typing import Any

from src.taskyminder.config import Config
from src.taskyminder.logger import setup_logger
from src.tasks import Task, TaskStore

from .schemas import TaskResponse

config = Config.from_yaml()
setup_logger(log_level=config.log_level, log_file=config.log_file)


@lru_cache(maxsize=1)
def get_task_store() -> TaskStore:
    """Singleton TaskStore, opened and initialized on first use."""
    store = TaskStore(db_path=config.database.path).open()
    store.initialize().result()
    return store


def close_task_store() -> None:
    """Close the cached store, if one was created."""
    if get_task_store.cache_info().currsize:
        get_task_store().close()
    get_task_store.cache_clear()


async def await_store(future: Future) -> Any:
    """Await a store future without blocking the event loop."""
    return await asyncio.wrap_future(future)


def serialize_task(task: Task) -> TaskResponse:
    """Convert domain Task to API response."""
    return TaskResponse(
        id=task.id,
        name=task.name,
        description=task.description,
        category=task.category,
    )
