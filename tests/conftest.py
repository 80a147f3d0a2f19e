# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from taskmaster.api.app import create_app
from taskmaster.cli.bootstrap import create_initial_state
from taskmaster.core.state import AppState
from taskmaster.tasks.task_service import TaskService
from taskmaster.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the HTTP layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskmaster-test",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState wired through the real composition root, on a tmp SQLite file."""
    return create_initial_state(settings=settings)


@pytest.fixture()
def task_store(state: AppState) -> TaskStore:
    return state.task_store


@pytest.fixture()
def task_service(state: AppState) -> TaskService:
    return state.task_service


@pytest.fixture()
def client(state: AppState):
    with TestClient(create_app(state)) as c:
        yield c
