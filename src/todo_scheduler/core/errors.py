# src/todo_scheduler/core/errors.py

"""
Failure taxonomy.

Every operation either returns a value or raises one of these. The HTTP connector maps
them to status codes; nothing below the connector knows about HTTP.
"""

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for all expected (input- or storage-driven) failures."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)

    default_message = "scheduler error"


class RuleParseError(SchedulerError):
    default_message = "unsupported repeat format"


class CalcError(SchedulerError):
    default_message = "no matching date found"


class MissingTitle(SchedulerError):
    default_message = "no title"


class InvalidDate(SchedulerError):
    default_message = "invalid date"


class InvalidRule(SchedulerError):
    default_message = "invalid repeat rule"


class InvalidTaskId(SchedulerError):
    default_message = "invalid id"


class TaskNotFound(SchedulerError):
    default_message = "task not found"


class StoreError(SchedulerError):
    default_message = "internal server error"
