"""Task endpoints."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException

from src.tasks import StoreError, Task, TaskDraft, TaskValidationError
from src.tasks.validation import validate_new_task, validate_task_edit

from ..dependencies import await_store, get_task_store, serialize_task
from ..schemas import (
    TaskCreateRequest,
    TaskDeleteResponse,
    TaskResponse,
    TaskUpdateRequest,
)

logger = logging.getLogger(__name__)


def register_task_routes(app: FastAPI) -> None:
    """Register task CRUD endpoints."""

    @app.get("/api/tasks", response_model=List[TaskResponse])
    async def list_tasks(category: Optional[str] = None) -> List[TaskResponse]:
        """List all tasks, or the tasks whose category matches exactly."""
        store = get_task_store()
        try:
            if category is None:
                tasks = await await_store(store.get_all_tasks())
            else:
                tasks = await await_store(store.get_tasks_by_category(category))
            return [serialize_task(task) for task in tasks]
        except StoreError as exc:
            raise HTTPException(status_code=500, detail="Failed to list tasks") from exc

    @app.post("/api/tasks", response_model=TaskResponse)
    async def create_task(request: TaskCreateRequest) -> TaskResponse:
        """Create a new task."""
        draft = TaskDraft(
            name=request.name,
            description=request.description,
            category=request.category,
        )
        try:
            validate_new_task(draft)
        except TaskValidationError as exc:
            raise HTTPException(status_code=422, detail=exc.message) from exc

        store = get_task_store()
        try:
            task = await await_store(store.add_task(draft))
            return serialize_task(task)
        except StoreError as exc:
            raise HTTPException(status_code=500, detail="Failed to create task") from exc

    @app.get("/api/tasks/{task_id}", response_model=TaskResponse)
    async def get_task(task_id: int) -> TaskResponse:
        """Fetch a single task."""
        store = get_task_store()
        try:
            task = await await_store(store.get_task(task_id))
        except StoreError as exc:
            raise HTTPException(status_code=500, detail="Failed to get task") from exc
        if task is None:
            raise HTTPException(status_code=404, detail="Task not found")
        return serialize_task(task)

    @app.put("/api/tasks/{task_id}", response_model=TaskResponse)
    async def update_task(task_id: int, request: TaskUpdateRequest) -> TaskResponse:
        """Replace name and description; the stored category never changes."""
        store = get_task_store()
        try:
            existing = await await_store(store.get_task(task_id))
            if existing is None:
                raise HTTPException(status_code=404, detail="Task not found")

            task = Task(
                id=task_id,
                name=request.name,
                description=request.description,
                category=existing.category,
            )
            try:
                validate_task_edit(task)
            except TaskValidationError as exc:
                raise HTTPException(status_code=422, detail=exc.message) from exc

            if request.category is not None and request.category != existing.category:
                logger.info("Ignoring category change for task %s", task_id)

            await await_store(store.update_task(task))
            updated = await await_store(store.get_task(task_id))
            if updated is None:
                raise HTTPException(status_code=404, detail="Task not found")
            return serialize_task(updated)
        except StoreError as exc:
            raise HTTPException(status_code=500, detail="Failed to update task") from exc

    @app.delete("/api/tasks/{task_id}", response_model=TaskDeleteResponse)
    async def delete_task(task_id: int) -> TaskDeleteResponse:
        """Delete a task."""
        store = get_task_store()
        try:
            deleted = await await_store(store.delete_task(task_id))
        except StoreError as exc:
            raise HTTPException(status_code=500, detail="Failed to delete task") from exc
        if not deleted:
            raise HTTPException(status_code=404, detail="Task not found")
        return TaskDeleteResponse(deleted=True)
