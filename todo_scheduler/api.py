"""Programmatic API facade for the scheduler.

Wraps the recurrence core and TaskScheduler behind one object that owns the
clock and the settings, so callers (an HTTP layer, a CLI, a script) never
have to thread "now" through by hand.

Usage:
    from todo_scheduler.api import SchedulerAPI

    api = SchedulerAPI()
    api.next_date("20240101", "m 1,15")
    task = api.prepare_task(Task(title="Pay rent", repeat="m 1"))
    outcome = api.complete_task(task)
"""
import logging
from datetime import date, datetime
from typing import Callable, Optional, Union

from todo_scheduler.config import Settings, configure_logging, load_settings
from todo_scheduler.models.entities import CompletionOutcome, SearchQuery, Task
from todo_scheduler.services.recurrence import next_date
from todo_scheduler.services.task_scheduler import TaskScheduler, parse_now

logger = logging.getLogger(__name__)


class SchedulerAPI:
    """High-level facade over the scheduling services.

    ``clock`` defaults to ``datetime.now`` and is only read here; the
    recurrence core always receives "now" as an argument.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.settings = settings or load_settings()
        self._clock = clock or datetime.now
        self._scheduler = TaskScheduler(self.settings)

    @classmethod
    def from_env(cls) -> "SchedulerAPI":
        """Build a facade for an application entry point.

        Reads TODO_* settings and applies TODO_LOG_LEVEL to the root logger.
        """
        settings = load_settings()
        configure_logging(settings.log_level)
        return cls(settings=settings)

    def now(self) -> datetime:
        return self._clock()

    def next_date(
        self,
        start: str,
        repeat: str,
        now: Optional[Union[date, datetime, str]] = None,
    ) -> str:
        """Next YYYYMMDD occurrence of repeat after now.

        Args:
            start: First occurrence as YYYYMMDD.
            repeat: Rule text such as ``"w 1,3"``.
            now: Reference date. A string is read as YYYYMMDD, blank or
                None means the clock's current time.
        """
        if now is None or isinstance(now, str):
            reference = parse_now(now or "", self.now())
        else:
            reference = now
        return next_date(reference, start, repeat, self.settings.search_horizon_years)

    def prepare_task(self, task: Task) -> Task:
        """Validate a new or edited task and normalize its date."""
        return self._scheduler.prepare_task(task, self.now())

    def complete_task(self, task: Task) -> CompletionOutcome:
        """Mark a task done: delete it, or reschedule it when it repeats."""
        outcome = self._scheduler.complete_task(task, self.now())
        logger.info(f"Completed task {task.id}: {outcome.action.value}")
        return outcome

    def search(self, text: str = "") -> SearchQuery:
        return self._scheduler.search(text)
