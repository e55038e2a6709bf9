# src/todo_scheduler/connectors/http_app.py

"""
HTTP connector.

Maps the REST endpoints onto TaskService and serializes results. All failures leave as
{"error": "<message>"} with 400 (input / rule problems), 404 (unknown task) or 500
(storage). Static files from settings.web_dir are served at "/" when the directory exists.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from ..core.errors import SchedulerError, StoreError, TaskNotFound
from ..core.state import AppState
from ..tasks.task_api import next_date_for
from .http_schemas import CreatedOut, ErrorOut, TaskIn, TaskOut, TasksOut, parse_task_id

logger = logging.getLogger(__name__)

_ERROR_STATUS: dict[type[SchedulerError], int] = {
    TaskNotFound: 404,
    StoreError: 500,
}

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorOut},
    404: {"model": ErrorOut},
    500: {"model": ErrorOut},
}


def status_for(exc: SchedulerError) -> int:
    for cls, code in _ERROR_STATUS.items():
        if isinstance(exc, cls):
            return code
    return 400


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


async def _scheduler_error_handler(request: Request, exc: SchedulerError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, status, exc)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, status, exc)
    return _error(status, str(exc))


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "invalid request"
    if errors:
        first = errors[0]
        loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        msg = first.get("msg", "")
        message = f"invalid request: {loc}: {msg}" if loc else f"invalid request: {msg}"
    logger.info("%s %s -> 400: %s", request.method, request.url.path, message)
    return _error(400, message)


def get_state(request: Request) -> AppState:
    return request.app.state.scheduler


router = APIRouter(prefix="/api", responses=_ERROR_RESPONSES)


@router.post("/task", response_model=CreatedOut)
def create_task(body: TaskIn = Body(...), state: AppState = Depends(get_state)) -> CreatedOut:
    task = body.to_task()
    task_id = state.service.create(task, state.today())
    return CreatedOut(id=task_id)


@router.get("/task", response_model=TaskOut)
def get_task(
    raw_id: str | None = Query(None, alias="id"),
    state: AppState = Depends(get_state),
) -> TaskOut:
    task = state.service.get(parse_task_id(raw_id))
    return TaskOut.from_task(task)


@router.put("/task", response_model=TaskOut)
def edit_task(body: TaskIn = Body(...), state: AppState = Depends(get_state)) -> TaskOut:
    task = body.to_task(with_id=True)
    saved = state.service.edit(task, state.today())
    return TaskOut.from_task(saved)


@router.delete("/task")
def delete_task(
    raw_id: str | None = Query(None, alias="id"),
    state: AppState = Depends(get_state),
) -> dict[str, Any]:
    state.service.delete(parse_task_id(raw_id))
    return {}


@router.post("/task/done")
def done_task(
    raw_id: str | None = Query(None, alias="id"),
    state: AppState = Depends(get_state),
) -> dict[str, Any]:
    state.service.complete(parse_task_id(raw_id), state.today())
    return {}


@router.get("/tasks", response_model=TasksOut)
def list_tasks(state: AppState = Depends(get_state)) -> TasksOut:
    limit = int(getattr(state.settings, "tasks_limit", 10))
    tasks = state.service.list_upcoming(limit)
    return TasksOut(tasks=[TaskOut.from_task(t) for t in tasks])


@router.get("/nextdate", response_class=PlainTextResponse)
def next_date(
    now: str | None = Query(None),
    start: str = Query("", alias="date"),
    repeat: str = Query(""),
    state: AppState = Depends(get_state),
) -> str:
    return next_date_for(now, start, repeat, today=state.today())


def create_app(state: AppState) -> FastAPI:
    """Build the FastAPI application around an already wired AppState."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("HTTP app ready (db=%s)", getattr(state.settings, "db_file", "?"))
        yield
        close = getattr(state.task_store, "close", None)
        if callable(close):
            close()
        logger.info("HTTP app stopped")

    app = FastAPI(
        title=str(getattr(state.settings, "app_name", "todo-scheduler")),
        lifespan=lifespan,
    )
    app.state.scheduler = state

    app.add_exception_handler(SchedulerError, _scheduler_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(router)

    web_dir = getattr(state.settings, "web_dir", None)
    if web_dir is not None and Path(web_dir).is_dir():
        app.mount("/", StaticFiles(directory=str(web_dir), html=True), name="web")
        logger.info("Serving static files from %s", web_dir)
    else:
        logger.warning("Static dir %s not found; serving API only", web_dir)

    return app
