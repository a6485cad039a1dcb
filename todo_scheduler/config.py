"""Scheduler configuration - single source of truth for all constants.

Contains the RecurrenceKind enum, date formats, rule limits and the
environment-backed Settings used by the service layer.
Import from here instead of hardcoding values elsewhere to ensure consistency.
"""
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv(Path(__file__).parent / ".env")


class RecurrenceKind(Enum):
    """Enum for the recurrence rule selector letter."""
    YEARLY = "y"
    DAILY = "d"
    WEEKLY = "w"
    MONTHLY = "m"


class CompletionAction(Enum):
    """What happens to a task once it is marked done."""
    DELETE = "delete"
    RESCHEDULE = "reschedule"


DATE_FORMAT = "%Y%m%d"
SEARCH_DATE_FORMAT = "%d.%m.%Y"
DATE_LENGTH = 8

MAX_INTERVAL_DAYS = 400
MAX_DAY_OF_MONTH = 31
MAX_DAY_OF_WEEK = 7
MIN_NEGATIVE_DAY = -2
MAX_MONTH = 12

SEARCH_HORIZON_YEARS = 10
DEFAULT_TASKS_LIMIT = 50
DEFAULT_LOG_LEVEL = "WARNING"


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer, using {default}")
        return default
    if value < 1:
        logger.warning(f"Ignoring {name}={raw!r}: must be positive, using {default}")
        return default
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the task scheduling layer."""
    search_horizon_years: int = SEARCH_HORIZON_YEARS
    tasks_limit: int = DEFAULT_TASKS_LIMIT
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings() -> Settings:
    """Build Settings from TODO_* environment variables."""
    return Settings(
        search_horizon_years=_int_from_env("TODO_SEARCH_HORIZON_YEARS", SEARCH_HORIZON_YEARS),
        tasks_limit=_int_from_env("TODO_TASKS_LIMIT", DEFAULT_TASKS_LIMIT),
        log_level=(os.getenv("TODO_LOG_LEVEL", "") or DEFAULT_LOG_LEVEL).upper(),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Apply a root logging level. Meant for applications, not library code."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
