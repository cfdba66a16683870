import logging
from typing import List

from ..errors import ValidationError
from ..models import Task, new_task
from ..repository.task_repository import TaskRepository

logger = logging.getLogger(__name__)


class TaskService:
    """Validation and orchestration on top of a task repository."""

    def __init__(self, repo: TaskRepository):
        self._repo = repo

    def create_task(self, title: str, description: str = "") -> Task:
        """Create a new task. The title must not be empty."""
        if title == "":
            raise ValidationError("title cannot be empty")

        task = new_task(title, description)
        self._repo.create(task)
        logger.info("Task created id=%s", task.id)
        return task

    def get_all_tasks(self) -> List[Task]:
        return self._repo.get_all()

    def get_task_by_id(self, task_id: str) -> Task:
        return self._repo.get_by_id(task_id)

    def toggle_task_completion(self, task_id: str) -> Task:
        """Flip the completion flag of a task and store the result."""
        with self._repo.key_lock(task_id):
            task = self._repo.get_by_id(task_id)
            updated = task.model_copy(update={"is_completed": not task.is_completed})
            self._repo.update(updated)
        logger.info("Task toggled id=%s completed=%s", task_id, updated.is_completed)
        return updated

    def delete_task(self, task_id: str) -> None:
        self._repo.delete(task_id)
        logger.info("Task deleted id=%s", task_id)

    def count_tasks(self) -> int:
        return self._repo.count()
