"""Tests for calendar helpers."""
from datetime import date, datetime

import pytest

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


class TestMonthBounds:
    def test_first_day(self):
        assert first_day_of_month(date(2024, 5, 17)) == date(2024, 5, 1)

    @pytest.mark.parametrize("d,expected", [
        (date(2024, 2, 10), date(2024, 2, 29)),
        (date(2023, 2, 10), date(2023, 2, 28)),
        (date(2024, 4, 1), date(2024, 4, 30)),
        (date(2024, 12, 31), date(2024, 12, 31)),
    ])
    def test_last_day(self, d, expected):
        assert last_day_of_month(d) == expected

    @pytest.mark.parametrize("d,expected", [
        (date(2024, 1, 31), date(2024, 2, 29)),
        (date(2024, 12, 31), date(2025, 1, 31)),
        (date(2024, 3, 31), date(2024, 4, 30)),
        (date(2023, 1, 15), date(2023, 2, 28)),
    ])
    def test_last_day_of_next_month(self, d, expected):
        assert last_day_of_next_month(d) == expected


class TestShifts:
    def test_add_months_clamps(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_add_months_crosses_year(self):
        assert add_months(date(2024, 12, 1), 1) == date(2025, 1, 1)

    @pytest.mark.parametrize("d,expected", [
        (date(2024, 2, 29), date(2025, 3, 1)),
        (date(2027, 2, 28), date(2028, 2, 28)),
        (date(2024, 12, 31), date(2025, 12, 31)),
        (date(2025, 3, 1), date(2026, 3, 1)),
    ])
    def test_next_year(self, d, expected):
        assert next_year(d) == expected

    def test_add_years_leap_day(self):
        assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)
        assert add_years(date(2024, 2, 29), 4) == date(2028, 2, 29)

    @pytest.mark.parametrize("target,current,expected", [
        (1, 1, 0),
        (3, 2, 1),
        (1, 3, 5),
        (7, 2, 5),
        (1, 7, 1),
    ])
    def test_weekday_offset(self, target, current, expected):
        assert weekday_offset(target, current) == expected


class TestDateText:
    def test_parse(self):
        assert parse_date("20240305") == date(2024, 3, 5)

    @pytest.mark.parametrize("text", [
        "", "2024035", "2024-03-05", "20240230", "2024030a", "202403051",
        "\uff12\uff10\uff12\uff14\uff10\uff13\uff10\uff15",
    ])
    def test_parse_rejects(self, text):
        with pytest.raises(ValueError):
            parse_date(text)

    def test_format(self):
        assert format_date(date(2024, 3, 5)) == "20240305"
        assert format_date(date(45, 6, 7)) == "00450607"

    def test_as_date_drops_time(self):
        assert as_date(datetime(2024, 3, 5, 23, 59)) == date(2024, 3, 5)
        assert as_date(date(2024, 3, 5)) == date(2024, 3, 5)
