"""FastAPI application bootstrap."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .dependencies import close_task_store, get_task_store
from .routes import (
    register_category_routes,
    register_health_routes,
    register_task_routes,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the task store at startup and close it at shutdown."""
    get_task_store()
    try:
        yield
    finally:
        close_task_store()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Taskyminder API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_health_routes(app)
    register_task_routes(app)
    register_category_routes(app)

    return app


app = create_app()
