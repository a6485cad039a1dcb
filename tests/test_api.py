"""Tests for SchedulerAPI facade."""
import logging
from datetime import date, datetime

import pytest

from todo_scheduler.api import SchedulerAPI
from todo_scheduler.config import CompletionAction, Settings
from todo_scheduler.errors import InvalidDateError, InvalidKindError, SearchExhaustedError
from todo_scheduler.models.entities import Task


# ===========================================================================
# next_date
# ===========================================================================

class TestNextDate:
    def test_uses_clock_when_now_omitted(self, api: SchedulerAPI):
        assert api.next_date("20240305", "w 1,3") == "20240306"

    def test_blank_now_string_uses_clock(self, api: SchedulerAPI):
        assert api.next_date("20240101", "y", now="") == "20250101"

    def test_now_as_string(self, api: SchedulerAPI):
        assert api.next_date("20240101", "m 31", now="20240201") == "20240331"

    def test_now_as_date(self, api: SchedulerAPI):
        assert api.next_date("20240101", "m -1", now=date(2024, 1, 1)) == "20240131"

    def test_now_as_datetime(self, api: SchedulerAPI):
        assert api.next_date("20240101", "d 3", now=datetime(2024, 1, 10, 8, 0)) == "20240113"

    def test_invalid_now_string(self, api: SchedulerAPI):
        with pytest.raises(InvalidDateError):
            api.next_date("20240101", "y", now="10.01.2024")

    def test_invalid_rule(self, api: SchedulerAPI):
        with pytest.raises(InvalidKindError):
            api.next_date("20240101", "x 1")

    def test_horizon_from_settings(self):
        api = SchedulerAPI(
            settings=Settings(search_horizon_years=1),
            clock=lambda: datetime(2024, 3, 5),
        )
        with pytest.raises(SearchExhaustedError):
            api.next_date("20240101", "m 29 2")


# ===========================================================================
# Tasks
# ===========================================================================

class TestTasks:
    def test_prepare_fills_today(self, api: SchedulerAPI):
        task = api.prepare_task(Task(title="Buy milk"))
        assert task.date == "20240305"

    def test_prepare_moves_past_recurring(self, api: SchedulerAPI):
        task = api.prepare_task(Task(title="Pay rent", date="20240101", repeat="m 1"))
        assert task.date == "20240401"

    def test_complete_one_off(self, api: SchedulerAPI):
        outcome = api.complete_task(Task(id="1", title="Once", date="20240305"))
        assert outcome.action == CompletionAction.DELETE

    def test_complete_recurring(self, api: SchedulerAPI, caplog):
        with caplog.at_level(logging.INFO, logger="todo_scheduler.api"):
            outcome = api.complete_task(Task(id="9", title="Stretch", date="20240305", repeat="d 2"))
        assert outcome.action == CompletionAction.RESCHEDULE
        assert outcome.next_date == "20240307"
        assert "Completed task 9: reschedule" in caplog.text

    def test_round_trip_through_dict(self, api: SchedulerAPI):
        payload = {"id": 4, "date": "", "title": "Stand-up", "comment": "", "repeat": "w 1,2,3,4,5"}
        task = api.prepare_task(Task.from_dict(payload))
        assert task.to_dict() == {
            "id": "4",
            "date": "20240305",
            "title": "Stand-up",
            "comment": "",
            "repeat": "w 1,2,3,4,5",
        }

    def test_search(self, api: SchedulerAPI):
        assert api.search("05.03.2024").date == "20240305"
        assert api.search().is_empty
        assert api.search().limit == 50


class TestFromEnv:
    def test_reads_settings(self, monkeypatch):
        monkeypatch.setenv("TODO_TASKS_LIMIT", "7")
        monkeypatch.delenv("TODO_SEARCH_HORIZON_YEARS", raising=False)
        api = SchedulerAPI.from_env()
        assert api.settings.tasks_limit == 7
        assert api.search("milk").limit == 7
