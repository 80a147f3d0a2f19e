# src/taskmaster/api/schemas.py

"""Request / response models for the tasks API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..tasks.task_models import Task


class TaskIn(BaseModel):
    """Body of POST /api/tasks and PUT /api/tasks/{id}. Unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    title: str
    description: Optional[str] = None
    completed: bool = False

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v

    @field_validator("title", "description")
    @classmethod
    def _storable_text(cls, v: Optional[str]) -> Optional[str]:
        # JSON escapes can smuggle in lone surrogates, which SQLite cannot store.
        if v is not None:
            try:
                v.encode("utf-8")
            except UnicodeEncodeError:
                raise ValueError("must be valid UTF-8 text") from None
        return v

    def to_task(self) -> Task:
        return Task(title=self.title, description=self.description, completed=self.completed)


class TaskOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_task(cls, task: Task) -> "TaskOut":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            completed=task.completed,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class ErrorOut(BaseModel):
    error: str
