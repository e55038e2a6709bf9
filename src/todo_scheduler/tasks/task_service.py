# src/todo_scheduler/tasks/task_service.py

from __future__ import annotations

"""
Task lifecycle.

A task is either pending (stored, dated today or later), or done. Completing a one-off
task removes its row; completing a recurring task moves its date to the next occurrence
and leaves everything else untouched.

Date logic lives in normalize_date(); the rule engine (rules + recurrence) is only ever
called from here and from task_api.next_date_for().
"""

import logging
from dataclasses import replace
from datetime import date

from ..core.errors import (
    CalcError,
    InvalidDate,
    InvalidRule,
    MissingTitle,
    RuleParseError,
    TaskNotFound,
)
from ..core.ports import TaskRepo
from .recurrence import format_date, next_date, parse_date
from .rules import parse_rule
from .task_models import Task

logger = logging.getLogger(__name__)


def validate(task: Task) -> None:
    if not task.title or not task.title.strip():
        raise MissingTitle("no title")


def advance(today: date, start: str, repeat: str) -> str:
    """Next date of ``repeat`` after ``today``; parse and calc failures become InvalidRule."""
    try:
        return next_date(today, start, parse_rule(repeat))
    except (RuleParseError, CalcError) as exc:
        raise InvalidRule(str(exc)) from exc


def normalize_date(task: Task, today: date) -> None:
    """
    Bring ``task.date`` to today or later, in place.

    - empty date -> today
    - past date, no rule -> today
    - past date, with rule -> next occurrence after today
    - today or later -> unchanged

    A future-dated task still has its rule checked, so a malformed repeat never reaches
    the store.
    """
    if not task.date:
        task.date = format_date(today)
        if task.recurring:
            _check_rule(task.repeat)
        return

    try:
        current = parse_date(task.date)
    except ValueError as exc:
        raise InvalidDate(f"invalid date: {task.date!r}") from exc

    if current >= today:
        if task.recurring:
            _check_rule(task.repeat)
        return

    if not task.recurring:
        task.date = format_date(today)
        return

    task.date = advance(today, task.date, task.repeat)


def _check_rule(repeat: str) -> None:
    try:
        parse_rule(repeat)
    except RuleParseError as exc:
        raise InvalidRule(str(exc)) from exc


class TaskService:
    """Create / edit / complete tasks on top of an injected TaskRepo."""

    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    def create(self, task: Task, today: date) -> int:
        validate(task)
        normalize_date(task, today)
        task_id = self._repo.add_task(task)
        task.id = task_id
        logger.info("Task created id=%s date=%s repeat=%r", task_id, task.date, task.repeat)
        return task_id

    def get(self, task_id: int) -> Task:
        task = self._repo.get_task(task_id)
        if task is None:
            raise TaskNotFound("task not found")
        return task

    def edit(self, task: Task, today: date) -> Task:
        if task.id is None or self._repo.get_task(task.id) is None:
            raise TaskNotFound("task not found")

        validate(task)
        normalize_date(task, today)

        if not self._repo.update_task(task):
            # removed between the lookup and the update
            raise TaskNotFound("task not found")
        logger.info("Task edited id=%s date=%s", task.id, task.date)
        return task

    def complete(self, task_id: int, today: date) -> Task | None:
        """
        Mark a task done.

        Returns None when the task was removed, or the rescheduled task.
        """
        task = self.get(task_id)

        if not task.recurring:
            if not self._repo.delete_task(task_id):
                raise TaskNotFound("task not found")
            logger.info("Task done and removed id=%s", task_id)
            return None

        new_date = advance(today, task.date, task.repeat)
        if not self._repo.update_task_date(task_id, new_date):
            raise TaskNotFound("task not found")
        logger.info("Task done and rescheduled id=%s %s -> %s", task_id, task.date, new_date)
        return replace(task, date=new_date)

    def delete(self, task_id: int) -> None:
        if not self._repo.delete_task(task_id):
            raise TaskNotFound("task not found")
        logger.info("Task deleted id=%s", task_id)

    def list_upcoming(self, limit: int = 10) -> list[Task]:
        return self._repo.list_tasks(limit=max(1, int(limit)))
