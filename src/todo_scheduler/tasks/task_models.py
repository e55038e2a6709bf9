# src/todo_scheduler/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class Task:
    """
    A scheduled task.

    Notes:
    - ``id`` is assigned by the store and is None before the first insert.
    - ``date`` is a YYYYMMDD string (empty on input means "today").
    - ``repeat`` holds the rule source string; "" means the task does not recur.
    """

    id: int | None
    date: str
    title: str
    comment: str = ""
    repeat: str = ""

    @property
    def recurring(self) -> bool:
        return bool(self.repeat.strip())

    def to_json(self) -> dict[str, Any]:
        # ids travel as strings on the wire
        return {
            "id": "" if self.id is None else str(self.id),
            "date": self.date,
            "title": self.title,
            "comment": self.comment,
            "repeat": self.repeat,
        }
