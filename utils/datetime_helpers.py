"""Timezone-aware date helpers and date parsing for the resort application."""

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from flask import current_app, has_app_context


class InvalidDateError(ValueError):
    """Raised for malformed dates or out-of-order date ranges."""


def get_timezone() -> ZoneInfo:
    """Get the configured timezone (Asia/Kolkata outside an app context)."""
    tz_name = 'Asia/Kolkata'
    if has_app_context():
        tz_name = current_app.config.get('TIMEZONE', tz_name)
    return ZoneInfo(tz_name)


def get_today() -> date:
    """Get today's date in the configured timezone."""
    return datetime.now(get_timezone()).date()


def parse_date(value) -> date:
    """
    Parse a date given as `date` or 'YYYY-MM-DD' string.

    Args:
        value: date, datetime or ISO date string

    Returns:
        date

    Raises:
        InvalidDateError: If the value is missing or malformed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        raise InvalidDateError(f"Invalid date: {value!r}")
    try:
        return datetime.strptime(value.strip(), '%Y-%m-%d').date()
    except ValueError:
        raise InvalidDateError(f"Invalid date: {value!r}") from None


def parse_date_range(start, end) -> tuple:
    """
    Parse an inclusive [start, end] range.

    Raises:
        InvalidDateError: If either bound is malformed or start > end
    """
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date > end_date:
        raise InvalidDateError(
            f"Start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
        )
    return start_date, end_date


def iter_dates(start: date, end: date):
    """Yield every date in the inclusive range [start, end]."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def calendar_window(anchor, view: str = 'week') -> tuple:
    """
    Get the (start, end) dates shown by a calendar view.

    Weeks start on Sunday; month views cover the whole calendar month.

    Args:
        anchor: Any date inside the wanted week or month
        view: 'week' or 'month'

    Returns:
        tuple: (start date, end date), both inclusive
    """
    anchor = parse_date(anchor)

    if view == 'month':
        start = anchor.replace(day=1)
        next_month = (start + timedelta(days=32)).replace(day=1)
        return start, next_month - timedelta(days=1)

    if view != 'week':
        raise ValueError(f"Unknown calendar view: {view}")

    # date.weekday(): Monday=0 .. Sunday=6
    start = anchor - timedelta(days=(anchor.weekday() + 1) % 7)
    return start, start + timedelta(days=6)
