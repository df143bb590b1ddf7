"""Tests for date parsing utilities."""

from datetime import date, datetime

import pytest

from fintracker.utils.date_parser import (
    end_of_day,
    end_of_month,
    get_date_range,
    parse_date,
    parse_datetime,
    start_of_day,
    start_of_month,
)

# A Wednesday
TODAY = date(2024, 3, 13)


class TestParseDate:
    """Tests for parse_date."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2024-01-15", date(2024, 1, 15)),
            ("January 15, 2024", date(2024, 1, 15)),
            ("15 Jan 2024", date(2024, 1, 15)),
        ],
    )
    def test_absolute_dates(self, text, expected):
        assert parse_date(text, today=TODAY) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("today", date(2024, 3, 13)),
            ("Yesterday", date(2024, 3, 12)),
            ("tomorrow", date(2024, 3, 14)),
            ("last month", date(2024, 2, 1)),
            ("this month", date(2024, 3, 1)),
            ("next month", date(2024, 4, 1)),
            ("last year", date(2023, 1, 1)),
            ("this week", date(2024, 3, 11)),
            ("last week", date(2024, 3, 4)),
            ("next week", date(2024, 3, 18)),
            ("last friday", date(2024, 3, 8)),
            ("last wednesday", date(2024, 3, 6)),
        ],
    )
    def test_relative_dates(self, text, expected):
        assert parse_date(text, today=TODAY) == expected

    def test_invalid_date(self):
        with pytest.raises(ValueError, match="Could not parse date"):
            parse_date("not a date", today=TODAY)


class TestParseDatetime:
    def test_bare_date_is_midnight(self):
        assert parse_datetime("2024-01-15") == datetime(2024, 1, 15)

    def test_keeps_time(self):
        assert parse_datetime("2024-01-15 18:30") == datetime(2024, 1, 15, 18, 30)

    def test_drops_timezone(self):
        assert parse_datetime("2024-01-15T18:30:00+05:30") == datetime(2024, 1, 15, 18, 30)

    def test_relative(self):
        assert parse_datetime("yesterday", today=TODAY) == datetime(2024, 3, 12)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_datetime("soon")


def test_day_and_month_boundaries():
    assert start_of_day(TODAY) == datetime(2024, 3, 13)
    assert end_of_day(TODAY) == datetime(2024, 3, 13, 23, 59, 59, 999999)
    assert start_of_month(TODAY) == datetime(2024, 3, 1)
    assert end_of_month(date(2024, 2, 10)) == datetime(2024, 2, 29, 23, 59, 59, 999999)
    assert end_of_month(date(2023, 12, 31)).date() == date(2023, 12, 31)


class TestGetDateRange:
    """Tests for get_date_range."""

    @pytest.mark.parametrize(
        "period, expected",
        [
            ("this-month", (date(2024, 3, 1), TODAY)),
            ("this-year", (date(2024, 1, 1), TODAY)),
            ("this-week", (date(2024, 3, 11), TODAY)),
            ("last-month", (date(2024, 2, 1), date(2024, 2, 29))),
            ("last-year", (date(2023, 1, 1), date(2023, 12, 31))),
            ("last-week", (date(2024, 3, 4), date(2024, 3, 10))),
        ],
    )
    def test_periods(self, period, expected):
        assert get_date_range(period, today=TODAY) == expected

    def test_last_month_across_year_boundary(self):
        assert get_date_range("last-month", today=date(2024, 1, 20)) == (
            date(2023, 12, 1),
            date(2023, 12, 31),
        )

    def test_unknown_period(self):
        with pytest.raises(ValueError, match="Unknown period"):
            get_date_range("next-decade", today=TODAY)
