# src/taskmaster/api/app.py

"""
HTTP layer for the task service.

Endpoints:
    POST   /api/tasks          -> create a task (200)
    GET    /api/tasks          -> list tasks
    GET    /api/tasks/{id}     -> one task, 404 if unknown
    PUT    /api/tasks/{id}     -> overwrite title/description/completed, 404 if unknown
    DELETE /api/tasks/{id}     -> delete (204), 404 if unknown

Validation failures answer 400 with a flat {field: message} body.
Unknown ids answer 404 with {"error": "Task not found with id: N"}.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, List

from fastapi import APIRouter, Depends, FastAPI, Path, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.state import AppState
from ..tasks.task_service import TaskNotFoundError, TaskService
from .schemas import ErrorOut, TaskIn, TaskOut

logger = logging.getLogger(__name__)

_LOC_SOURCES = {"body", "path", "query", "header", "cookie"}


def get_task_service(request: Request) -> TaskService:
    """Resolve the TaskService wired into the running app."""
    state: AppState = request.app.state.taskmaster
    return state.task_service


router = APIRouter(prefix="/api/tasks", tags=["tasks"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorOut}}

# Ids are SQLite INTEGERs (signed 64-bit).
TaskId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


@router.post("", response_model=TaskOut)
def create_task(payload: TaskIn, service: TaskService = Depends(get_task_service)):
    return TaskOut.from_task(service.create_task(payload.to_task()))


@router.get("", response_model=List[TaskOut])
def list_tasks(service: TaskService = Depends(get_task_service)):
    return [TaskOut.from_task(t) for t in service.get_all_tasks()]


@router.get("/{task_id}", response_model=TaskOut, responses=_NOT_FOUND)
def get_task(task_id: TaskId, service: TaskService = Depends(get_task_service)):
    return TaskOut.from_task(service.get_task_by_id(task_id))


@router.put("/{task_id}", response_model=TaskOut, responses=_NOT_FOUND)
def update_task(task_id: TaskId, payload: TaskIn, service: TaskService = Depends(get_task_service)):
    return TaskOut.from_task(service.update_task(task_id, payload.to_task()))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
def delete_task(task_id: TaskId, service: TaskService = Depends(get_task_service)):
    service.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _field_name(loc: tuple[Any, ...]) -> str:
    """('body', 'title') -> 'title'; ('body', 12) or ('body',) -> 'body'."""
    names = [p for p in loc if isinstance(p, str) and p not in _LOC_SOURCES]
    return names[-1] if names else "body"


def _error_message(err: dict[str, Any]) -> str:
    # Raised ValueErrors carry the original exception; its text reads better
    # than pydantic's "Value error, ..." wrapper.
    ctx = err.get("ctx") or {}
    cause = ctx.get("error")
    if isinstance(cause, Exception):
        return str(cause)
    return str(err.get("msg", "invalid value"))


async def _on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, str] = {}
    for err in exc.errors():
        errors.setdefault(_field_name(tuple(err.get("loc", ()))), _error_message(err))
    logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=errors)


async def _on_task_not_found(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    logger.info("%s %s -> 404 (%s)", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})


def create_app(state: AppState) -> FastAPI:
    """Build the FastAPI app around an already wired AppState."""
    app = FastAPI(title=getattr(state.settings, "app_name", "taskmaster"), version="1.0.0")
    app.state.taskmaster = state

    app.add_exception_handler(RequestValidationError, _on_validation_error)
    app.add_exception_handler(TaskNotFoundError, _on_task_not_found)
    app.include_router(router)

    return app
