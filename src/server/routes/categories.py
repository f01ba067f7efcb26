"""Category endpoints.

Categories are not stored; they are the distinct ``category`` values of the
current tasks.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException

from src.tasks import StoreError, derive_categories

from ..dependencies import await_store, get_task_store, serialize_task
from ..schemas import CategoryDeleteResponse, CategoryListResponse, TaskResponse

logger = logging.getLogger(__name__)


def register_category_routes(app: FastAPI) -> None:
    """Register category endpoints."""

    @app.get("/api/categories", response_model=CategoryListResponse)
    async def list_categories() -> CategoryListResponse:
        store = get_task_store()
        try:
            tasks = await await_store(store.get_all_tasks())
        except StoreError as exc:
            raise HTTPException(status_code=500, detail="Failed to list categories") from exc
        return CategoryListResponse(categories=derive_categories(tasks))

    @app.get("/api/categories/{category}/tasks", response_model=List[TaskResponse])
    async def list_category_tasks(category: str) -> List[TaskResponse]:
        store = get_task_store()
        try:
            tasks = await await_store(store.get_tasks_by_category(category))
        except StoreError as exc:
            raise HTTPException(status_code=500, detail="Failed to list tasks") from exc
        return [serialize_task(task) for task in tasks]

    @app.delete("/api/categories/{category}", response_model=CategoryDeleteResponse)
    async def delete_category(category: str) -> CategoryDeleteResponse:
        """Delete every task in the category. Unknown categories delete nothing."""
        store = get_task_store()
        try:
            deleted = await await_store(store.delete_tasks_by_category(category))
        except StoreError as exc:
            raise HTTPException(status_code=500, detail="Failed to delete category") from exc
        logger.info("Deleted category %r (%d tasks)", category, deleted)
        return CategoryDeleteResponse(category=category, deleted=deleted)
