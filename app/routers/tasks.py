from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..dependencies import get_task_service
from ..errors import ValidationError
from ..schemas.task import Task as TaskSchema, TaskCreate
from ..services.task_service import TaskService

router = APIRouter()


def _require_id(task_id: Optional[str]) -> str:
    if not task_id:
        raise ValidationError("id parameter is required")
    return task_id


@router.get("/tasks", response_model=List[TaskSchema])
def get_all_tasks(service: TaskService = Depends(get_task_service)):
    """Get all tasks. Order is not guaranteed."""
    return service.get_all_tasks()


@router.post("/tasks", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
def create_task(task: TaskCreate, service: TaskService = Depends(get_task_service)):
    """Create a new task."""
    return service.create_task(task.title, task.description)


@router.get("/tasks/by-id", response_model=TaskSchema)
def get_task_by_id(
    task_id: Optional[str] = Query(default=None, alias="id"),
    service: TaskService = Depends(get_task_service),
):
    """Get a specific task by ID."""
    return service.get_task_by_id(_require_id(task_id))


@router.put("/tasks/toggle", response_model=TaskSchema)
def toggle_task_completion(
    task_id: Optional[str] = Query(default=None, alias="id"),
    service: TaskService = Depends(get_task_service),
):
    """Flip the completion status of a task."""
    return service.toggle_task_completion(_require_id(task_id))


@router.delete("/tasks/delete", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_task(
    task_id: Optional[str] = Query(default=None, alias="id"),
    service: TaskService = Depends(get_task_service),
):
    """Delete a specific task."""
    service.delete_task(_require_id(task_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
