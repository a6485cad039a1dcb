import logging
import re
from datetime import date, datetime
from typing import Optional, Union

from todo_scheduler.config import CompletionAction, SEARCH_DATE_FORMAT, Settings
from todo_scheduler.errors import EmptyTitleError, InvalidDateError, RecurrenceError
from todo_scheduler.helpers import as_date, format_date, parse_date
from todo_scheduler.models.entities import CompletionOutcome, RecurrenceRule, SearchQuery, Task
from todo_scheduler.services.recurrence import next_occurrence
from todo_scheduler.services.rules import load_rule

logger = logging.getLogger(__name__)

_SEARCH_DATE_RE = re.compile(r"[0-9]{2}\.[0-9]{2}\.[0-9]{4}")


def parse_now(value: str, today: date) -> date:
    """Read a client-supplied reference date, falling back to today when blank.

    Raises:
        InvalidDateError: If value is set but is not YYYYMMDD.
    """
    if not value:
        return today
    try:
        return parse_date(value)
    except ValueError:
        raise InvalidDateError(f"now invalid format: {value!r}") from None


def parse_search(text: str, limit: int) -> SearchQuery:
    """Turn a search box value into a filter.

    Zero-padded ``DD.MM.YYYY`` selects a single day, anything else is a keyword.
    """
    text = text.strip()
    if not text:
        return SearchQuery(limit=limit)
    if not _SEARCH_DATE_RE.fullmatch(text):
        return SearchQuery(limit=limit, text=text)
    try:
        day = datetime.strptime(text, SEARCH_DATE_FORMAT).date()
    except ValueError:
        return SearchQuery(limit=limit, text=text)
    return SearchQuery(limit=limit, date=format_date(day))


class TaskScheduler:
    """Date rules for tasks on their way into and out of storage.

    Storage itself is the caller's business: methods take a Task and return
    the Task (or outcome) that should be persisted.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()

    def _load_rule(self, task: Task) -> RecurrenceRule:
        try:
            return load_rule(task.repeat)
        except RecurrenceError as e:
            logger.warning(f"Rejected repeat rule {task.repeat!r} for task {task.id}: {e}")
            raise

    def next_date(self, task: Task, now: Union[date, datetime]) -> str:
        """Next date for a recurring task strictly after now."""
        rule = self._load_rule(task)
        try:
            start = parse_date(task.date)
        except ValueError:
            raise InvalidDateError(f"task date invalid format: {task.date!r}") from None
        return format_date(
            next_occurrence(now, start, rule, self.settings.search_horizon_years)
        )

    def prepare_task(self, task: Task, now: Union[date, datetime]) -> Task:
        """Validate a task and move a past date forward.

        A missing date becomes today. A date before today becomes the next
        occurrence when the task repeats, otherwise today. The repeat rule is
        checked even when the date does not need moving.

        Raises:
            EmptyTitleError: If the title is blank.
            InvalidDateError: If the date is set but not YYYYMMDD.
            RecurrenceError: If the repeat rule does not parse or validate.
        """
        if not task.title.strip():
            raise EmptyTitleError()

        today = as_date(now)
        prepared = task.with_date(task.date or format_date(today))
        try:
            start = parse_date(prepared.date)
        except ValueError:
            raise InvalidDateError(f"task date invalid format: {prepared.date!r}") from None

        if prepared.is_recurring:
            self._load_rule(prepared)

        if start >= today:
            return prepared

        if prepared.is_recurring:
            next_date = self.next_date(prepared, now)
        else:
            next_date = format_date(today)
        logger.debug(f"Moving task {task.id} from {prepared.date} to {next_date}")
        return prepared.with_date(next_date)

    def complete_task(self, task: Task, now: Union[date, datetime]) -> CompletionOutcome:
        """Decide what marking a task done means.

        One-off tasks are deleted, recurring ones move to their next date.
        """
        if not task.is_recurring:
            logger.debug(f"Task {task.id} has no repeat rule, deleting")
            return CompletionOutcome(task=task, action=CompletionAction.DELETE)

        next_date = self.next_date(task, now)
        logger.debug(f"Task {task.id} rescheduled to {next_date}")
        return CompletionOutcome(
            task=task.with_date(next_date),
            action=CompletionAction.RESCHEDULE,
            next_date=next_date,
        )

    def search(self, text: str) -> SearchQuery:
        return parse_search(text, self.settings.tasks_limit)
