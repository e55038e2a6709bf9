# src/todo_scheduler/connectors/http_schemas.py

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from ..core.errors import InvalidTaskId
from ..tasks.task_models import Task

# SQLite INTEGER PRIMARY KEY range
MAX_TASK_ID = 2**63 - 1

_ID_RE = re.compile(r"[0-9]+")


def parse_task_id(raw: Any) -> int:
    """Wire id (string or int) -> positive int. Raises InvalidTaskId."""
    if isinstance(raw, bool):
        raise InvalidTaskId("invalid id")
    if isinstance(raw, int):
        task_id = raw
    else:
        # str.isdigit() would let "²" through
        text = str(raw or "").strip()
        if not _ID_RE.fullmatch(text):
            raise InvalidTaskId("invalid id")
        task_id = int(text)
    if task_id <= 0 or task_id > MAX_TASK_ID:
        raise InvalidTaskId("invalid id")
    return task_id


class TaskIn(BaseModel):
    """Request body for POST/PUT /api/task. Missing or null text fields mean ""."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    date: str = ""
    title: str = ""
    comment: str = ""
    repeat: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("date", "title", "comment", "repeat", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    def to_task(self, *, with_id: bool = False) -> Task:
        task_id = parse_task_id(self.id) if with_id else None
        return Task(
            id=task_id,
            date=self.date.strip(),
            title=self.title.strip(),
            comment=self.comment,
            repeat=self.repeat.strip(),
        )


class TaskOut(BaseModel):
    id: str
    date: str
    title: str
    comment: str
    repeat: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskOut":
        return cls(**task.to_json())


class TasksOut(BaseModel):
    tasks: list[TaskOut]


class CreatedOut(BaseModel):
    id: int


class ErrorOut(BaseModel):
    error: str
