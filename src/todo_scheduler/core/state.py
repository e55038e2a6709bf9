# src/todo_scheduler/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from ..tasks.task_service import TaskService
from .ports import Clock, TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    task_store: TaskRepo
    service: TaskService
    clock: Clock = date.today

    def today(self) -> date:
        return self.clock()
