"""Calendar helpers shared by the recurrence core and the task layer.

All functions are pure and work on ``datetime.date`` values.
"""
import calendar
from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta

from todo_scheduler.config import DATE_FORMAT, DATE_LENGTH


def first_day_of_month(d: date) -> date:
    return d.replace(day=1)


def last_day_of_month(d: date) -> date:
    """Last calendar day of d's month (28/29/30/31 as appropriate)."""
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def last_day_of_next_month(d: date) -> date:
    """Last calendar day of the month following d's month.

    Crosses the December -> January boundary into the next year.
    """
    return last_day_of_month(first_day_of_month(d) + relativedelta(months=1))


def add_months(d: date, months: int) -> date:
    """Shift d by whole months, clamping the day to the target month's end."""
    return d + relativedelta(months=months)


def add_years(d: date, years: int) -> date:
    """Shift d by whole years. Feb 29 lands on Feb 28 in non-leap years."""
    return d + relativedelta(years=years)


def next_year(d: date) -> date:
    """Same day one year later. Feb 29 rolls over to Mar 1 in common years."""
    if d.month == 2 and d.day == 29 and not calendar.isleap(d.year + 1):
        return date(d.year + 1, 3, 1)
    return d.replace(year=d.year + 1)


def weekday_offset(target_weekday: int, current_weekday: int) -> int:
    """Days from current_weekday forward to target_weekday (both ISO, 1=Mon..7=Sun)."""
    return (target_weekday - current_weekday + 7) % 7


def as_date(value: Union[date, datetime]) -> date:
    """Drop the time-of-day part of a datetime; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date(text: str) -> date:
    """Parse a strict 8-digit YYYYMMDD string.

    Raises:
        ValueError: If text is not exactly eight digits or not a real date.
    """
    if len(text) != DATE_LENGTH or not (text.isascii() and text.isdigit()):
        raise ValueError(f"expected YYYYMMDD, got {text!r}")
    return datetime.strptime(text, DATE_FORMAT).date()


def format_date(d: date) -> str:
    """Format as YYYYMMDD, zero-padding years below 1000."""
    return f"{d.year:04d}{d.month:02d}{d.day:02d}"
