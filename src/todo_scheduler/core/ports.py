# src/todo_scheduler/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task service depends on a Protocol instead of the concrete SQLite store, so tests
can swap in an in-memory repo. "Today" comes from an injected clock, never from the
system clock inside the engine.
"""

from collections.abc import Callable
from datetime import date
from typing import Protocol

from ..tasks.task_models import Task

Clock = Callable[[], date]
# Returns the local calendar date used as "today".


class TaskRepo(Protocol):
    def get_task(self, task_id: int) -> Task | None: ...
    def add_task(self, task: Task) -> int: ...
    def update_task(self, task: Task) -> bool: ...
    def update_task_date(self, task_id: int, new_date: str) -> bool: ...
    def delete_task(self, task_id: int) -> bool: ...
    def list_tasks(self, *, limit: int = 10) -> list[Task]: ...
