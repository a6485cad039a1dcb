from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from todo_scheduler.config import CompletionAction, RecurrenceKind


@dataclass
class RecurrenceRule:
    """Parsed repeat rule: selector letter plus sorted day and month lists.

    ``key`` keeps the raw selector so an unknown letter survives parsing and
    is reported by validation. An empty ``months`` list means every month.
    """
    key: str
    days: List[int] = field(default_factory=list)
    months: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.days = sorted(self.days)
        self.months = sorted(self.months)

    @property
    def kind(self) -> Optional[RecurrenceKind]:
        try:
            return RecurrenceKind(self.key)
        except ValueError:
            return None

    @property
    def positive_days(self) -> List[int]:
        return [d for d in self.days if d >= 0]

    @property
    def negative_days(self) -> List[int]:
        return [d for d in self.days if d < 0]


@dataclass
class Task:
    """Scheduled task as exchanged with the storage layer.

    ``date`` is a YYYYMMDD string and ``repeat`` an optional rule string.
    """
    title: str
    date: str = ""
    comment: str = ""
    repeat: str = ""
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id or "",
            "date": self.date,
            "title": self.title,
            "comment": self.comment,
            "repeat": self.repeat,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Task":
        task_id = d.get("id")
        return cls(
            id=str(task_id) if task_id not in (None, "") else None,
            date=d.get("date") or "",
            title=d.get("title") or "",
            comment=d.get("comment") or "",
            repeat=d.get("repeat") or "",
        )

    @property
    def is_recurring(self) -> bool:
        return bool(self.repeat)

    def with_date(self, new_date: str) -> "Task":
        """Copy of this task moved to new_date."""
        return Task(
            id=self.id,
            date=new_date,
            title=self.title,
            comment=self.comment,
            repeat=self.repeat,
        )


@dataclass
class CompletionOutcome:
    """Result of marking a task done: delete it, or move it to next_date."""
    task: Task
    action: CompletionAction
    next_date: Optional[str] = None


@dataclass
class SearchQuery:
    """Task list filter. At most one of ``date`` and ``text`` is set."""
    limit: int
    date: Optional[str] = None
    text: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.date is None and self.text is None
