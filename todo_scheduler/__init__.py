"""Task scheduler core - repeat rules and next-date calculation.

Public API: ``from todo_scheduler import next_date`` is the single entry
point most callers need; the rest is re-exported for typed use.
"""
from todo_scheduler.config import RecurrenceKind  # noqa: F401
from todo_scheduler.errors import (  # noqa: F401
    DateOutOfRangeError,
    InvalidFormatError,
    InvalidKindError,
    InvalidStartDateError,
    ParseError,
    RecurrenceError,
    SchedulerError,
    SearchExhaustedError,
    ValidationError,
)
from todo_scheduler.models.entities import RecurrenceRule, Task  # noqa: F401
from todo_scheduler.services.recurrence import next_date, next_occurrence  # noqa: F401
from todo_scheduler.services.rules import parse_rule, validate_rule  # noqa: F401
