"""
Room calendar service.

Fetches a fresh snapshot of rooms, overrides and active bookings for each
request and hands it to the resolver in models.availability. Nothing is
cached between calls, so an override or booking change is visible to the
next query.

Also the single write path for availability overrides.
"""

import logging

from flask import current_app

from database import get_db
from models import availability
from models.booking import list_active_bookings
from models.room import get_room_by_id, get_all_rooms
from models.room_availability import (
    upsert_override,
    get_override,
    list_overrides,
    list_overrides_for_range,
    delete_override,
)
from utils.datetime_helpers import (
    parse_date,
    parse_date_range,
    iter_dates,
    calendar_window,
    InvalidDateError,
)

logger = logging.getLogger(__name__)


def _require_room(room_id: int) -> dict:
    room = get_room_by_id(room_id)
    if not room:
        raise ValueError("Room not found")
    return room


def _check_window(start, end, max_days: int = None) -> tuple:
    start_date, end_date = parse_date_range(start, end)
    if max_days is None:
        max_days = current_app.config.get('CALENDAR_MAX_DAYS', 62)
    if (end_date - start_date).days + 1 > max_days:
        raise InvalidDateError(f"Date range cannot exceed {max_days} days")
    return start_date, end_date


# =============================================================================
# READS
# =============================================================================

def get_effective_status(room_id: int, target_date) -> str:
    """
    Effective status of a room on a date.

    Raises:
        InvalidDateError: If the date is malformed
        ValueError: If the room does not exist
    """
    day = parse_date(target_date)
    room = _require_room(room_id)
    overrides = list_overrides(room_id, day, day)
    bookings = list_active_bookings(room['room_type'], date_from=day, date_to=day)
    return availability.effective_status(room, day, overrides, bookings)


def get_effective_status_range(room_id: int, start, end) -> dict:
    """
    Effective status of a room for every date in [start, end].

    Returns:
        dict: ISO date -> status
    """
    start_date, end_date = _check_window(start, end)
    room = _require_room(room_id)
    overrides = list_overrides(room_id, start_date, end_date)
    bookings = list_active_bookings(room['room_type'], date_from=start_date, date_to=end_date)
    return availability.effective_status_range(room, start_date, end_date, overrides, bookings)


def get_matching_booking(room_id: int, target_date):
    """Booking shown for a room on a date, or None."""
    day = parse_date(target_date)
    room = _require_room(room_id)
    bookings = list_active_bookings(room['room_type'], date_from=day, date_to=day)
    return availability.matching_booking(room, day, bookings)


def get_room_day(room_id: int, target_date) -> dict:
    """
    Full resolution detail for a room on a date.

    Returns:
        dict: resolve_day() result plus the room
    """
    day = parse_date(target_date)
    room = _require_room(room_id)
    overrides = list_overrides(room_id, day, day)
    bookings = list_active_bookings(room['room_type'], date_from=day, date_to=day)
    detail = availability.resolve_day(room, day, overrides, bookings)
    detail['room'] = room
    return detail


def get_calendar(start, end, room_type: str = None, search: str = None) -> dict:
    """
    Resolve the calendar grid for active rooms over [start, end].

    Returns:
        dict: {
            'start': ISO date, 'end': ISO date, 'dates': [ISO dates],
            'rooms': [{'room': room, 'days': {date: status}}],
            'summary': {date: {status: count}}
        }
    """
    start_date, end_date = _check_window(start, end)
    rooms = get_all_rooms(room_type=room_type, search=search)
    room_ids = [room['id'] for room in rooms]

    overrides = list_overrides_for_range(start_date, end_date, room_ids) if room_ids else []
    bookings = list_active_bookings(room_type, date_from=start_date, date_to=end_date)

    grid = availability.build_calendar(rooms, start_date, end_date, overrides, bookings)
    dates = [d.isoformat() for d in iter_dates(start_date, end_date)]

    summary = {}
    for day in dates:
        counts = {}
        for row in grid:
            status = row['days'][day]
            counts[status] = counts.get(status, 0) + 1
        summary[day] = counts

    return {
        'start': start_date.isoformat(),
        'end': end_date.isoformat(),
        'dates': dates,
        'rooms': grid,
        'summary': summary,
    }


def get_calendar_view(anchor, view: str = 'week', room_type: str = None, search: str = None) -> dict:
    """Calendar grid for the week (Sunday-Saturday) or month containing anchor."""
    start_date, end_date = calendar_window(anchor, view)
    calendar = get_calendar(start_date, end_date, room_type=room_type, search=search)
    calendar['view'] = view
    return calendar


def get_occupancy_rate(target_date) -> float:
    """Percentage of active rooms occupied on a date."""
    day = parse_date(target_date)
    rooms = get_all_rooms()
    overrides = list_overrides_for_range(day, day)
    bookings = list_active_bookings(date_from=day, date_to=day)
    return availability.occupancy_rate(rooms, day, overrides, bookings)


# =============================================================================
# OVERRIDE WRITES
# =============================================================================

def _conflicting_bookings(room: dict, days: list, status: str) -> list:
    """Active bookings that the new override contradicts on the given days."""
    if status == availability.STATUS_OCCUPIED or not days:
        return []

    bookings = list_active_bookings(room['room_type'], date_from=days[0], date_to=days[-1])
    conflicts = {}
    for day in days:
        for booking in availability.covering_bookings(room, day, bookings):
            entry = conflicts.setdefault(booking['id'], {
                'booking_id': booking['id'],
                'customer_name': booking.get('customer_name'),
                'check_in': booking['check_in'],
                'check_out': booking['check_out'],
                'dates': [],
            })
            entry['dates'].append(day.isoformat())
    return list(conflicts.values())


def set_override(room_id: int, target_date, status: str, notes: str = None, updated_by: str = None) -> dict:
    """
    Set a room's status for one date (upsert, last write wins).

    An override contradicting an active booking is still written; the
    bookings are returned so the caller can warn about them.

    Returns:
        dict: {'override': dict, 'conflicting_bookings': list}

    Raises:
        InvalidDateError: If the date is malformed
        ValueError: If the room does not exist or the status is unknown
    """
    day = parse_date(target_date)
    room = _require_room(room_id)

    upsert_override(room_id, day, status, notes=notes, updated_by=updated_by)
    conflicts = _conflicting_bookings(room, [day], status)

    if conflicts:
        logger.info(
            "Override %s on room %s %s contradicts bookings %s",
            status, room['room_number'], day.isoformat(),
            [c['booking_id'] for c in conflicts]
        )

    return {
        'override': get_override(room_id, day),
        'conflicting_bookings': conflicts,
    }


def set_override_range(
    room_id: int,
    start,
    end,
    status: str,
    notes: str = None,
    updated_by: str = None
) -> dict:
    """
    Set a room's status for every date in [start, end] in one transaction.

    Returns:
        dict: {'dates': [ISO dates], 'conflicting_bookings': list}
    """
    start_date, end_date = _check_window(start, end)
    room = _require_room(room_id)
    days = list(iter_dates(start_date, end_date))

    db = get_db()
    try:
        for day in days:
            upsert_override(room_id, day, status, notes=notes, updated_by=updated_by, commit=False)
        db.commit()
    except Exception:
        db.rollback()
        raise

    return {
        'dates': [d.isoformat() for d in days],
        'conflicting_bookings': _conflicting_bookings(room, days, status),
    }


def clear_override(room_id: int, target_date) -> bool:
    """Remove a room's override for a date; booking inference applies again."""
    return delete_override(room_id, target_date)
