# src/taskmaster/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_service import TaskService
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings kept on the state so the HTTP layer never reads global config.
    settings: object

    task_store: TaskStore
    task_service: TaskService
