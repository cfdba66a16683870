from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(BaseModel):
    """Task record held by the task store.

    Records are frozen: a changed task is a new copy written back through
    the store's ``update``.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    description: str = ""
    is_completed: bool = False
    created_at: datetime = Field(default_factory=_utcnow)


def new_task(title: str, description: str = "") -> Task:
    """Build a fresh, not yet completed task with a generated id."""
    return Task(title=title, description=description)
