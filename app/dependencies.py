from fastapi import Request

from .services.task_service import TaskService


def get_task_service(request: Request) -> TaskService:
    """Dependency to get the task service attached to the running app."""
    return request.app.state.task_service
