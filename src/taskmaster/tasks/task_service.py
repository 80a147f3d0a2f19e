# src/taskmaster/tasks/task_service.py

from __future__ import annotations

import logging
from dataclasses import replace

from ..core.ports import TaskRepo
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskNotFoundError(LookupError):
    """Raised when an operation references a task id absent from the store."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task not found with id: {task_id}")


class TaskService:
    """
    CRUD operations over a TaskRepo.

    Title validation happens at the HTTP boundary; the service trusts its input.
    """

    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    def create_task(self, task: Task) -> Task:
        # The store owns identity and timestamps.
        saved = self._repo.save(replace(task, id=None, created_at=None, updated_at=None))
        logger.info("Task created id=%s", saved.id)
        return saved

    def update_task(self, task_id: int, details: Task) -> Task:
        task = self.get_task_by_id(task_id)

        task.title = details.title
        task.description = details.description
        task.completed = details.completed

        saved = self._repo.save(task)
        logger.info("Task updated id=%s completed=%s", saved.id, saved.completed)
        return saved

    def get_task_by_id(self, task_id: int) -> Task:
        task = self._repo.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def get_all_tasks(self) -> list[Task]:
        return self._repo.find_all()

    def delete_task(self, task_id: int) -> None:
        if not self._repo.exists_by_id(task_id):
            raise TaskNotFoundError(task_id)
        self._repo.delete_by_id(task_id)
        logger.info("Task deleted id=%s", task_id)
