# src/taskmaster/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the service layer.

TaskService depends on this Protocol instead of the SQLite store,
so the storage backend stays swappable and tests can use an in-memory repo.
"""

from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    def save(self, task: Task) -> Task: ...
    def find_by_id(self, task_id: int) -> Task | None: ...
    def find_all(self) -> list[Task]: ...
    def exists_by_id(self, task_id: int) -> bool: ...
    def delete_by_id(self, task_id: int) -> None: ...
