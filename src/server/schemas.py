"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class TaskResponse(BaseModel):
    """Serialized task."""

    id: int
    name: str
    description: str
    category: str


class TaskCreateRequest(BaseModel):
    """Request body for creating a task."""

    name: str = Field(..., description="Task name (required, not blank)")
    description: str = Field(default="", description="Optional details")
    category: str = Field(..., description="Category label (required, not blank)")


class TaskUpdateRequest(BaseModel):
    """Request body for updating a task.

    Only name and description are stored; a category sent here is ignored.
    """

    name: str = Field(..., description="New task name (required, not blank)")
    description: str = Field(default="")
    category: Optional[str] = Field(
        default=None, description="Accepted for symmetry with create; never persisted"
    )


class TaskDeleteResponse(BaseModel):
    """Response for task deletion."""

    deleted: bool


class CategoryListResponse(BaseModel):
    """Categories derived from the current tasks."""

    categories: List[str]


class CategoryDeleteResponse(BaseModel):
    """Response for category deletion."""

    category: str
    deleted: int = Field(..., description="Number of tasks removed")
