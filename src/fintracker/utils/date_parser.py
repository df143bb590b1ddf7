"""Date parsing and day/month boundary utilities."""

from datetime import date, datetime, time, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def _relative_date(text: str, today: date) -> Optional[date]:
    """Resolve 'today', 'last month', 'next week', 'last friday' and friends."""
    fixed = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in fixed:
        return fixed[text]

    direction, _, unit = text.partition(" ")
    monday = today - timedelta(days=today.weekday())
    offsets = {"last": -1, "this": 0, "next": 1}
    if direction not in offsets:
        return None
    step = offsets[direction]

    if unit == "month":
        return (today + relativedelta(months=step)).replace(day=1)
    if unit == "year":
        return today.replace(month=1, day=1) + relativedelta(years=step)
    if unit == "week":
        return monday + timedelta(weeks=step)
    if direction == "last" and unit in WEEKDAYS:
        days_ago = (today.weekday() - WEEKDAYS.index(unit)) % 7 or 7
        return today - timedelta(days=days_ago)
    return None


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones ("today", "yesterday", "last month", "this year", "last friday").

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    relative = _relative_date(text, today or date.today())
    if relative is not None:
        return relative

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e


def parse_datetime(value: str, today: Optional[date] = None) -> datetime:
    """Parse a date or date-time string into a naive datetime.

    A bare date (absolute or relative) resolves to midnight of that day;
    a value with a time part keeps it.

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = value.strip().lower()
    relative = _relative_date(text, today or date.today())
    if relative is not None:
        return start_of_day(relative)

    try:
        parsed = date_parser.parse(text)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}") from e
    return parsed.replace(tzinfo=None)


def start_of_day(day: date) -> datetime:
    """Midnight at the start of ``day``."""
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last representable instant of ``day``."""
    return datetime.combine(day, time.max)


def start_of_month(day: date) -> datetime:
    """Midnight on the first day of ``day``'s month."""
    return start_of_day(day.replace(day=1))


def end_of_month(day: date) -> datetime:
    """Last instant of the last day of ``day``'s month."""
    last = day.replace(day=1) + relativedelta(months=1) - timedelta(days=1)
    return end_of_day(last)


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    month, year or Monday-to-Sunday week.

    Args:
        period: One of this-month, this-year, this-week, last-month, last-year, last-week
        today: Reference day (defaults to today)

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()
    monday = today - timedelta(days=today.weekday())
    first_of_month = today.replace(day=1)
    first_of_year = today.replace(month=1, day=1)

    if period == "this-month":
        return first_of_month, today
    if period == "this-year":
        return first_of_year, today
    if period == "this-week":
        return monday, today
    if period == "last-month":
        return first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1)
    if period == "last-year":
        return first_of_year - relativedelta(years=1), first_of_year - timedelta(days=1)
    if period == "last-week":
        return monday - timedelta(weeks=1), monday - timedelta(days=1)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
