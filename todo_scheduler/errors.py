"""Exception hierarchy for the scheduler.

Every failure is a distinct class with a stable ``code`` so callers can map
each kind of bad input to its own user-facing message.
"""


class SchedulerError(Exception):
    """Base class for all scheduler errors."""
    code = "scheduler_error"
    default_message = "scheduler error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class RecurrenceError(SchedulerError):
    """Raised by the recurrence core."""
    code = "recurrence_error"


class ParseError(RecurrenceError):
    code = "parse_error"


class InvalidFormatError(ParseError):
    """A day or month list element is not an integer."""
    code = "invalid_format"
    default_message = "repeat parameter invalid format"


class ValidationError(RecurrenceError):
    code = "validation_error"


class InvalidKindError(ValidationError):
    code = "invalid_kind"
    default_message = "repeat parameter invalid character"


class MissingDaysError(ValidationError):
    code = "missing_days"
    default_message = "repeat parameter no days interval"


class IntervalTooLargeError(ValidationError):
    code = "interval_too_large"
    default_message = "repeat parameter interval exceeded"


class InvalidIntervalError(ValidationError):
    code = "invalid_interval"
    default_message = "repeat parameter interval must be positive"


class InvalidDayOfMonthError(ValidationError):
    code = "invalid_day_of_month"
    default_message = "repeat parameter invalid day of the month"


class InvalidDayOfWeekError(ValidationError):
    code = "invalid_day_of_week"
    default_message = "repeat parameter invalid day of the week"


class InvalidMonthError(ValidationError):
    code = "invalid_month"
    default_message = "repeat parameter invalid month"


class InvalidStartDateError(RecurrenceError):
    code = "invalid_start_date"
    default_message = "start date invalid format"


class SearchExhaustedError(RecurrenceError):
    """A forward scan passed its horizon without finding a matching date.

    Only reachable for rules whose days never occur in the allowed months,
    e.g. ``m 31 2``.
    """
    code = "search_exhausted"
    default_message = "no matching date within the search horizon"


class DateOutOfRangeError(RecurrenceError):
    """The next date would fall after 9999-12-31."""
    code = "date_out_of_range"
    default_message = "next date is out of the supported calendar range"


class TaskError(SchedulerError):
    """Raised by the task scheduling layer."""
    code = "task_error"


class EmptyTitleError(TaskError):
    code = "empty_title"
    default_message = "empty Title"


class InvalidDateError(TaskError):
    code = "invalid_date"
    default_message = "date invalid format"
