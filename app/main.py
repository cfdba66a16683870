import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .middleware import cors_middleware, register_error_handlers
from .repository.task_repository import InMemoryTaskRepository
from .routers import health, tasks
from .services.task_service import TaskService

logger = logging.getLogger(__name__)

ENDPOINTS = [
    ("GET", "/tasks", "Get all tasks"),
    ("POST", "/tasks", "Create a task"),
    ("GET", "/tasks/by-id?id=", "Get task by ID"),
    ("PUT", "/tasks/toggle?id=", "Toggle task completion"),
    ("DELETE", "/tasks/delete?id=", "Delete task"),
    ("GET", "/health", "Health check"),
]


def _log_endpoints() -> None:
    logger.info("Available endpoints:")
    for method, path, summary in ENDPOINTS:
        logger.info("  %-6s %-18s - %s", method, path, summary)


def create_app(service: Optional[TaskService] = None) -> FastAPI:
    """Build the API around a task service.

    A fresh in-memory store is created when no service is given.
    """
    if service is None:
        service = TaskService(InMemoryTaskRepository())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _log_endpoints()
        logger.info("Task store ready with %d tasks", service.count_tasks())
        yield
        logger.info("Tasks API shutting down")

    app = FastAPI(
        title="Tasks API",
        description="Minimal in-memory task management API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.task_service = service

    app.middleware("http")(cors_middleware)
    register_error_handlers(app)

    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(health.router, tags=["health"])

    return app


app = create_app()
