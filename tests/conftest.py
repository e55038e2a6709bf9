# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from todo_scheduler.cli.bootstrap import create_initial_state
from todo_scheduler.connectors.http_app import create_app
from todo_scheduler.core.state import AppState
from todo_scheduler.tasks.task_store import TaskStore

from .fakes import FixedClock

TODAY = date(2024, 6, 10)  # a Monday


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the HTTP app.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-scheduler-test",
        log_level="DEBUG",
        host="127.0.0.1",
        port=7540,
        web_dir=tmp_path / "web",
        db_file=tmp_path / "scheduler.db",
        tasks_limit=10,
        data_dir=tmp_path / "data",
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "store.db")


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FixedClock) -> AppState:
    """
    AppState wired like production, with a fixed clock.

    NOTE: We keep the real SQLite store here because its correctness is part of
    what we want to test through the HTTP layer.
    """
    return create_initial_state(settings=settings, clock=clock)


@pytest.fixture()
def client(state: AppState) -> Iterator[TestClient]:
    with TestClient(create_app(state)) as c:
        yield c
