from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator
from pydantic.alias_generators import to_camel


class TaskCreate(BaseModel):
    """Request body for creating a task.

    Missing or null fields decode as empty strings.
    """
    title: Optional[StrictStr] = ""
    description: Optional[StrictStr] = ""

    @field_validator("title", "description")
    @classmethod
    def _null_as_empty(cls, value: Optional[str]) -> str:
        return "" if value is None else value


class Task(BaseModel):
    """Task as returned by the API, with camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    title: str
    description: str
    is_completed: bool
    created_at: datetime


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "healthy"
