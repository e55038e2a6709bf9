# src/todo_scheduler/tasks/recurrence.py

"""
Recurrence calculator.

``next_date`` returns the first date strictly after ``today`` produced by a rule:
- Daily / Yearly are offsets from the stored start date (start + k * step, k >= 1);
- Weekly / Monthly are absolute calendar positions, found by scanning forward from the
  day after max(today, start).

Yearly uses dateutil's relativedelta, so Feb 29 maps to Feb 28 in non-leap years.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from ..core.errors import CalcError
from .rules import Daily, Monthly, Rule, Weekly, Yearly

DATE_FORMAT = "%Y%m%d"

# ~10 years; enough for "m 29 2" across a skipped leap year (e.g. 2096 -> 2104).
MAX_LOOKAHEAD_DAYS = 3660

_DATE_RE = re.compile(r"^\d{8}$")


def parse_date(text: str) -> date:
    """Parse a fixed-width YYYYMMDD string. Raises ValueError."""
    # strptime alone accepts "2024011" as 2024-01-01
    if not isinstance(text, str) or not _DATE_RE.match(text):
        raise ValueError(f"date must be 8 digits YYYYMMDD, got {text!r}")
    return datetime.strptime(text, DATE_FORMAT).date()


def format_date(d: date) -> str:
    return f"{d.year:04d}{d.month:02d}{d.day:02d}"


def _next_daily(today: date, start: date, rule: Daily) -> date:
    step = rule.interval
    if start > today:
        k = 1
    else:
        k = (today - start).days // step + 1
    return start + timedelta(days=k * step)


def _next_yearly(today: date, start: date) -> date:
    # Smallest k with start + k years > today; candidates below today.year can't qualify.
    k = max(1, today.year - start.year)
    while True:
        candidate = start + relativedelta(years=k)
        if candidate > today:
            return candidate
        k += 1


def _days_from_end(d: date) -> int:
    """-1 for the last day of the month, -2 for the one before it, and so on."""
    last = calendar.monthrange(d.year, d.month)[1]
    return d.day - last - 1


def _matches(candidate: date, rule: Weekly | Monthly) -> bool:
    if isinstance(rule, Weekly):
        return candidate.isoweekday() in rule.days

    if rule.months and candidate.month not in rule.months:
        return False
    return candidate.day in rule.days or _days_from_end(candidate) in rule.days


def _scan(today: date, start: date, rule: Weekly | Monthly) -> date:
    candidate = max(today, start)
    for _ in range(MAX_LOOKAHEAD_DAYS):
        candidate += timedelta(days=1)
        if _matches(candidate, rule):
            return candidate
    raise CalcError("no matching date found")


def next_date(today: date, start: str, rule: Rule) -> str:
    """
    Next occurrence of ``rule`` strictly after ``today``, as YYYYMMDD.

    Raises CalcError if ``start`` is not a valid date or no date can be found.
    """
    try:
        start_date = parse_date(start)
    except ValueError as exc:
        raise CalcError("invalid start date") from exc

    try:
        if isinstance(rule, Daily):
            result = _next_daily(today, start_date, rule)
        elif isinstance(rule, Yearly):
            result = _next_yearly(today, start_date)
        elif isinstance(rule, (Weekly, Monthly)):
            result = _scan(today, start_date, rule)
        else:
            raise TypeError(f"not a rule: {rule!r}")
    except (OverflowError, ValueError) as exc:
        # past date.max
        raise CalcError("no matching date found") from exc

    return format_date(result)
