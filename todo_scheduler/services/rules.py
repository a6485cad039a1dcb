"""Repeat rule parsing and validation.

Rule grammar is space separated: ``<kind> [days] [months]`` where kind is one
of y/d/w/m and days/months are comma separated integers, e.g. ``m 1,-1 2,8``.
"""
import logging
import re
from typing import List

from todo_scheduler.config import (
    MAX_DAY_OF_MONTH,
    MAX_DAY_OF_WEEK,
    MAX_INTERVAL_DAYS,
    MAX_MONTH,
    MIN_NEGATIVE_DAY,
    RecurrenceKind,
)
from todo_scheduler.errors import (
    IntervalTooLargeError,
    InvalidDayOfMonthError,
    InvalidDayOfWeekError,
    InvalidFormatError,
    InvalidIntervalError,
    InvalidKindError,
    InvalidMonthError,
    MissingDaysError,
)
from todo_scheduler.models.entities import RecurrenceRule

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _parse_int_list(value: str) -> List[int]:
    result = []
    for item in value.split(","):
        if not _INT_RE.fullmatch(item):
            raise InvalidFormatError(f"repeat parameter invalid format: {item!r}")
        result.append(int(item))
    return result


def parse_rule(rule_text: str) -> RecurrenceRule:
    """Split a rule string into a RecurrenceRule.

    Tokens after the third are ignored. The kind letter is not checked here.

    Raises:
        InvalidFormatError: If a day or month element is not an integer.
    """
    tokens = rule_text.split(" ")
    days: List[int] = []
    months: List[int] = []
    if len(tokens) > 1:
        days = _parse_int_list(tokens[1])
    if len(tokens) > 2:
        months = _parse_int_list(tokens[2])
    return RecurrenceRule(key=tokens[0], days=days, months=months)


def _check_daily(days: List[int]) -> None:
    if any(d > MAX_INTERVAL_DAYS for d in days):
        raise IntervalTooLargeError()
    if any(d < 1 for d in days):
        raise InvalidIntervalError()


def _check_calendar_days(kind: RecurrenceKind, days: List[int]) -> None:
    if any(abs(d) > MAX_DAY_OF_MONTH for d in days):
        raise InvalidDayOfMonthError()

    if kind == RecurrenceKind.WEEKLY:
        # 1 = Monday ... 7 = Sunday
        if any(d > MAX_DAY_OF_WEEK or d < 1 for d in days):
            raise InvalidDayOfWeekError()

    if kind == RecurrenceKind.MONTHLY:
        # -1 and -2 count back from the month end; 0 is not a day
        if any(d < MIN_NEGATIVE_DAY or d == 0 for d in days):
            raise InvalidDayOfMonthError()


def validate_rule(rule: RecurrenceRule) -> RecurrenceKind:
    """Check a parsed rule against the per-kind limits.

    Returns:
        The rule's RecurrenceKind, for dispatch.

    Raises:
        ValidationError: The first failing check, as its specific subclass.
    """
    kind = rule.kind
    if kind is None:
        raise InvalidKindError(f"repeat parameter invalid character: {rule.key!r}")

    if kind != RecurrenceKind.YEARLY and not rule.days:
        raise MissingDaysError()

    if kind == RecurrenceKind.DAILY:
        _check_daily(rule.days)
    else:
        _check_calendar_days(kind, rule.days)

    if any(m > MAX_MONTH or m < 1 for m in rule.months):
        raise InvalidMonthError()

    return kind


def load_rule(rule_text: str) -> RecurrenceRule:
    """Parse and validate in one step."""
    rule = parse_rule(rule_text)
    validate_rule(rule)
    return rule
