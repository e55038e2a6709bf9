# src/todo_scheduler/tasks/rules.py

"""
Repeat-rule parser.

Grammar (whitespace-separated tokens):
- ``y``                     -> Yearly
- ``d <n>``                 -> Daily, 1 <= n <= 400
- ``w <days>``              -> Weekly, comma list of 1..7 (Monday = 1)
- ``m <days> [<months>]``   -> Monthly, days in 1..31 or -1/-2 (last / second-to-last),
                               months in 1..12 (absent = every month)

An empty string is not a rule; callers treat ``repeat == ""`` as "no recurrence"
before calling the parser.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..core.errors import RuleParseError

MAX_DAILY_INTERVAL = 400

_INT_RE = re.compile(r"^-?\d+$")


@dataclass(frozen=True, slots=True)
class Daily:
    interval: int


@dataclass(frozen=True, slots=True)
class Yearly:
    pass


@dataclass(frozen=True, slots=True)
class Weekly:
    days: frozenset[int]


@dataclass(frozen=True, slots=True)
class Monthly:
    days: frozenset[int]
    months: frozenset[int] = field(default_factory=frozenset)


Rule = Daily | Yearly | Weekly | Monthly


def _parse_int(token: str, what: str) -> int:
    # int() alone would accept "+5", " 5" and "5_0"
    if not _INT_RE.match(token):
        raise RuleParseError(f"invalid {what} value: {token!r}")
    return int(token)


def _parse_int_list(raw: str, what: str) -> list[int]:
    if not raw:
        raise RuleParseError(f"empty {what} list")
    return [_parse_int(part, what) for part in raw.split(",")]


def _parse_daily(args: list[str]) -> Daily:
    if len(args) != 1:
        raise RuleParseError("unsupported repeat format")
    interval = _parse_int(args[0], "interval")
    if interval < 1 or interval > MAX_DAILY_INTERVAL:
        raise RuleParseError(f"interval must be between 1 and {MAX_DAILY_INTERVAL}, got {interval}")
    return Daily(interval)


def _parse_weekly(args: list[str]) -> Weekly:
    if len(args) != 1:
        raise RuleParseError("unsupported repeat format")
    days = _parse_int_list(args[0], "weekday")
    for d in days:
        if d < 1 or d > 7:
            raise RuleParseError(f"weekday must be between 1 and 7, got {d}")
    return Weekly(frozenset(days))


def _parse_monthly(args: list[str]) -> Monthly:
    if len(args) not in (1, 2):
        raise RuleParseError("unsupported repeat format")

    days = _parse_int_list(args[0], "day")
    for d in days:
        if d in (-1, -2):
            continue
        if d < 1 or d > 31:
            raise RuleParseError(f"day must be between 1 and 31 or -1/-2, got {d}")

    months: list[int] = []
    if len(args) == 2:
        months = _parse_int_list(args[1], "month")
        for m in months:
            if m < 1 or m > 12:
                raise RuleParseError(f"month must be between 1 and 12, got {m}")

    return Monthly(frozenset(days), frozenset(months))


def parse_rule(text: str) -> Rule:
    """Parse a repeat-rule string. Raises RuleParseError on malformed input."""
    tokens = (text or "").split()
    if not tokens:
        raise RuleParseError("empty repeat rule")

    kind, args = tokens[0], tokens[1:]

    if kind == "y":
        if args:
            raise RuleParseError("unsupported repeat format")
        return Yearly()
    if kind == "d":
        return _parse_daily(args)
    if kind == "w":
        return _parse_weekly(args)
    if kind == "m":
        return _parse_monthly(args)

    raise RuleParseError("unsupported repeat format")


def _join(values: frozenset[int]) -> str:
    return ",".join(str(v) for v in sorted(values))


def format_rule(rule: Rule) -> str:
    """Canonical string form of a rule (sorted values)."""
    if isinstance(rule, Yearly):
        return "y"
    if isinstance(rule, Daily):
        return f"d {rule.interval}"
    if isinstance(rule, Weekly):
        return f"w {_join(rule.days)}"
    if isinstance(rule, Monthly):
        if rule.months:
            return f"m {_join(rule.days)} {_join(rule.months)}"
        return f"m {_join(rule.days)}"
    raise TypeError(f"not a rule: {rule!r}")
