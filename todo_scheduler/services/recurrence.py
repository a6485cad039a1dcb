"""Next occurrence calculation for repeating tasks.

Given a start date, a reference "now" and a repeat rule, finds the first
date strictly after now that the rule produces. Everything here is pure:
"now" is always passed in and nothing reads the clock.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional, Set, Union

from todo_scheduler.config import SEARCH_HORIZON_YEARS, RecurrenceKind
from todo_scheduler.errors import DateOutOfRangeError, InvalidStartDateError, SearchExhaustedError
from todo_scheduler.helpers import (
    add_months,
    add_years,
    as_date,
    first_day_of_month,
    format_date,
    last_day_of_month,
    last_day_of_next_month,
    next_year,
    parse_date,
    weekday_offset,
)
from todo_scheduler.models.entities import RecurrenceRule
from todo_scheduler.services.rules import parse_rule, validate_rule

logger = logging.getLogger(__name__)


def _next_yearly(start: date, now: date, rule: RecurrenceRule, limit: date) -> date:
    candidate = next_year(start)
    while candidate <= now:
        candidate = next_year(candidate)
    return candidate


def _next_daily(start: date, now: date, rule: RecurrenceRule, limit: date) -> date:
    interval = rule.days[0]
    steps = 1
    if start <= now:
        steps = (now - start).days // interval + 1
    return start + timedelta(days=interval * steps)


def _next_weekly(start: date, now: date, rule: RecurrenceRule, limit: date) -> date:
    week_start = start
    while week_start <= limit:
        weekday = week_start.isoweekday()
        candidates = sorted(
            week_start + timedelta(days=weekday_offset(d, weekday))
            for d in rule.days
        )
        for candidate in candidates:
            if candidate > now:
                return candidate
        week_start += timedelta(weeks=1)
    raise SearchExhaustedError(f"no weekday match for {rule.days} before {limit}")


def _scan_days_forward(
    start: date,
    now: date,
    days: List[int],
    limit: date,
    months: Optional[Set[int]] = None,
) -> date:
    """First day-of-month in days after now, month by month from start's month.

    A day number the month does not have (31 in April) is skipped, never
    rolled over into the next month.
    """
    month_start = first_day_of_month(start)
    while month_start <= limit:
        if months is None or month_start.month in months:
            for day in days:
                candidate = month_start + timedelta(days=day - 1)
                if candidate.day == day and candidate > now:
                    return candidate
        month_start = add_months(month_start, 1)
    raise SearchExhaustedError(
        f"no date for days {days} in months {sorted(months) if months else 'all'} before {limit}"
    )


def _scan_month_ends(start: date, now: date, days: List[int], limit: date) -> date:
    """First date counted back from a month end (-1 last day, -2 the day before) after now."""
    month_end = last_day_of_month(start)
    while month_end <= limit:
        for day in days:
            candidate = month_end + timedelta(days=day + 1)
            if candidate > now:
                return candidate
        month_end = last_day_of_next_month(month_end)
    raise SearchExhaustedError(f"no month-end match for {days} before {limit}")


def _next_monthly(start: date, now: date, rule: RecurrenceRule, limit: date) -> date:
    if rule.months:
        return _scan_days_forward(start, now, rule.days, limit, months=set(rule.months))

    positive = rule.positive_days
    negative = rule.negative_days
    if not negative:
        return _scan_days_forward(start, now, positive, limit)
    if not positive:
        return _scan_month_ends(start, now, negative, limit)
    return min(
        _scan_days_forward(start, now, positive, limit),
        _scan_month_ends(start, now, negative, limit),
    )


_Advancer = Callable[[date, date, RecurrenceRule, date], date]

_ADVANCERS: Dict[RecurrenceKind, _Advancer] = {
    RecurrenceKind.YEARLY: _next_yearly,
    RecurrenceKind.DAILY: _next_daily,
    RecurrenceKind.WEEKLY: _next_weekly,
    RecurrenceKind.MONTHLY: _next_monthly,
}


def next_occurrence(
    now: Union[date, datetime],
    start: date,
    rule: RecurrenceRule,
    horizon_years: int = SEARCH_HORIZON_YEARS,
) -> date:
    """Next date produced by rule that falls strictly after now.

    Args:
        now: Reference moment. Only its calendar date is used.
        start: First occurrence of the task.
        rule: Parsed rule; validated here before any date math.
        horizon_years: How far past max(start, now) a scan may go.

    Raises:
        ValidationError: If the rule breaks a per-kind limit.
        SearchExhaustedError: If no date matches within the horizon.
        DateOutOfRangeError: If the next date would fall after year 9999.
    """
    kind = validate_rule(rule)
    today = as_date(now)
    try:
        limit = add_years(max(start, today), horizon_years)
    except ValueError:
        limit = date.max
    try:
        result = _ADVANCERS[kind](start, today, rule, limit)
    except SearchExhaustedError as e:
        logger.error(f"Recurrence search exhausted for rule {rule.key} {rule.days} {rule.months}: {e}")
        raise
    except (OverflowError, ValueError) as e:
        logger.error(f"Recurrence search from {start} ran past the calendar: {e}")
        raise DateOutOfRangeError(f"next date after {start} is out of range") from e
    logger.debug(f"Next {kind.name.lower()} date after {today} from {start}: {result}")
    return result


def next_date(
    now: Union[date, datetime],
    start: str,
    repeat: str,
    horizon_years: int = SEARCH_HORIZON_YEARS,
) -> str:
    """String-level entry point: YYYYMMDD start + rule text -> YYYYMMDD.

    The rule is checked before the start date, so a bad rule is reported
    even when the start date is also malformed.

    Raises:
        ParseError: If a day or month list element is not an integer.
        ValidationError: If the rule breaks a per-kind limit.
        InvalidStartDateError: If start is not a YYYYMMDD date.
        SearchExhaustedError: If no date matches within the horizon.
        DateOutOfRangeError: If the next date would fall after year 9999.
    """
    rule = parse_rule(repeat)
    validate_rule(rule)
    try:
        start_date = parse_date(start)
    except ValueError:
        raise InvalidStartDateError(f"start date invalid format: {start!r}") from None
    return format_date(next_occurrence(now, start_date, rule, horizon_years))
