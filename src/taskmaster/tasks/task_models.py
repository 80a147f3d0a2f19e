# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Task:
    """
    A to-do item.

    id/created_at/updated_at are owned by the store: they stay None until the
    task is saved for the first time.
    """

    title: str
    description: str | None = None
    completed: bool = False

    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
