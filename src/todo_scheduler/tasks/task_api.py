# src/todo_scheduler/tasks/task_api.py

from __future__ import annotations

import logging
from datetime import date

from ..core.errors import InvalidDate, InvalidRule
from .recurrence import parse_date
from .task_service import advance

logger = logging.getLogger(__name__)


def next_date_for(now: str | None, start: str, repeat: str, *, today: date) -> str:
    """
    Convenience helper behind GET /api/nextdate.

    ``now`` is an optional YYYYMMDD reference date; when missing, ``today`` is used.
    Unlike task normalization, an empty ``repeat`` is an error here: there is nothing
    to compute.
    """
    reference = today
    if now:
        try:
            reference = parse_date(now)
        except ValueError as exc:
            raise InvalidDate(f"invalid now: {now!r}") from exc

    if not repeat or not repeat.strip():
        raise InvalidRule("repeat rule is required")

    result = advance(reference, start, repeat)
    logger.debug("nextdate now=%s date=%s repeat=%r -> %s", reference, start, repeat, result)
    return result
