"""Shared fixtures for scheduler tests."""
from datetime import datetime

import pytest

from todo_scheduler.api import SchedulerAPI
from todo_scheduler.config import Settings
from todo_scheduler.services.task_scheduler import TaskScheduler

# Tuesday, mid-morning
FIXED_NOW = datetime(2024, 3, 5, 9, 30, 0)


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the TODO_* environment."""
    return Settings()


@pytest.fixture
def scheduler(settings: Settings) -> TaskScheduler:
    return TaskScheduler(settings)


@pytest.fixture
def api(settings: Settings) -> SchedulerAPI:
    """Facade whose clock is frozen at FIXED_NOW."""
    return SchedulerAPI(settings=settings, clock=lambda: FIXED_NOW)
