"""
Room availability resolution.

Derives a room's effective status for a date from two inputs:
explicit availability overrides (room_availability rows) and bookings.

Resolution order for (room, date):
1. An override for (room id, date) is returned verbatim.
2. Otherwise, a booking in an occupying state (confirmed, checked_in) whose
   room_type equals the room's type and whose stay covers the date
   (check_in <= date < check_out) makes the room 'occupied'.
3. Otherwise the room is 'available'.

Bookings are made against a room type, not a room, so several bookings can
cover the same room and date. They are ordered by earliest check_in, then
created_at, then id; the first is the matching booking and the rest are
reported through an AmbiguousMatchWarning. The warning is informational
only and never blocks anything.

Every function here is pure: callers pass the snapshot of rooms, overrides
and bookings they fetched for the request.
"""

import logging

from utils.constants import OCCUPYING_BOOKING_STATUSES
from utils.datetime_helpers import parse_date, parse_date_range, iter_dates

logger = logging.getLogger(__name__)


STATUS_AVAILABLE = 'available'
STATUS_OCCUPIED = 'occupied'

SOURCE_OVERRIDE = 'override'
SOURCE_BOOKING = 'booking'
SOURCE_DEFAULT = 'default'


class AmbiguousMatchWarning(UserWarning):
    """More than one booking covers the same room and date."""

    def __init__(self, room: dict, target_date, bookings: list):
        self.room_id = room.get('id')
        self.room_number = room.get('room_number')
        self.date = parse_date(target_date).isoformat()
        self.booking_ids = [b.get('id') for b in bookings]
        super().__init__(
            f"{len(self.booking_ids)} bookings match room "
            f"{self.room_number or self.room_id} on {self.date}"
        )

    def to_dict(self) -> dict:
        return {
            'room_id': self.room_id,
            'room_number': self.room_number,
            'date': self.date,
            'booking_ids': self.booking_ids,
            'message': str(self),
        }


# =============================================================================
# SNAPSHOT HELPERS
# =============================================================================

def index_overrides(room_id, overrides: list) -> dict:
    """
    Map ISO date -> override for one room.

    Rows are unique per (room_id, date) in storage; if a snapshot still
    carries duplicates the later row wins.
    """
    indexed = {}
    for override in overrides:
        if override.get('room_id') != room_id:
            continue
        indexed[parse_date(override['date']).isoformat()] = override
    return indexed


def _booking_sort_key(booking: dict) -> tuple:
    return (
        parse_date(booking['check_in']),
        str(booking.get('created_at') or ''),
        booking.get('id') or 0,
    )


def booking_covers(booking: dict, target_date) -> bool:
    """Check the half-open stay interval: check_in <= date < check_out."""
    target = parse_date(target_date)
    return parse_date(booking['check_in']) <= target < parse_date(booking['check_out'])


def covering_bookings(room: dict, target_date, bookings: list) -> list:
    """
    Get occupying bookings for the room's type that cover a date.

    Args:
        room: Room dict (needs room_type)
        target_date: Date to check
        bookings: Booking snapshot (any statuses, any types)

    Returns:
        list: Matching bookings in tie-break order
    """
    target = parse_date(target_date)
    matches = [
        b for b in bookings
        if b.get('status') in OCCUPYING_BOOKING_STATUSES
        and b.get('room_type') == room.get('room_type')
        and booking_covers(b, target)
    ]
    return sorted(matches, key=_booking_sort_key)


# =============================================================================
# RESOLUTION
# =============================================================================

def matching_booking(room: dict, target_date, bookings: list):
    """
    Get the booking shown for a room on a date, or None.

    Overrides do not hide the matching booking; detail views show both.
    """
    matches = covering_bookings(room, target_date, bookings)
    return matches[0] if matches else None


def effective_status(room: dict, target_date, overrides: list, bookings: list) -> str:
    """
    Resolve the effective status of a room on a date.

    Returns:
        str: One of available, occupied, maintenance, blocked

    Raises:
        InvalidDateError: If target_date is malformed
    """
    target = parse_date(target_date).isoformat()

    override = index_overrides(room.get('id'), overrides).get(target)
    if override:
        return override['status']

    if matching_booking(room, target, bookings):
        return STATUS_OCCUPIED

    return STATUS_AVAILABLE


def effective_status_range(room: dict, start, end, overrides: list, bookings: list) -> dict:
    """
    Resolve the effective status for every date in [start, end].

    Returns:
        dict: ISO date -> status, in date order

    Raises:
        InvalidDateError: If a bound is malformed or start > end
    """
    start_date, end_date = parse_date_range(start, end)
    room_overrides = index_overrides(room.get('id'), overrides)
    type_bookings = _occupying_for_type(room, bookings)

    statuses = {}
    for day in iter_dates(start_date, end_date):
        key = day.isoformat()
        if key in room_overrides:
            statuses[key] = room_overrides[key]['status']
        elif any(booking_covers(b, day) for b in type_bookings):
            statuses[key] = STATUS_OCCUPIED
        else:
            statuses[key] = STATUS_AVAILABLE
    return statuses


def resolve_day(room: dict, target_date, overrides: list, bookings: list) -> dict:
    """
    Resolve a room's day with the detail needed by the calendar dialog.

    Returns:
        dict: {
            'date': 'YYYY-MM-DD',
            'status': str,
            'source': 'override' | 'booking' | 'default',
            'override': dict or None,
            'booking': dict or None,
            'ambiguous': AmbiguousMatchWarning or None,
            'capacity_exceeded': bool
        }
    """
    target = parse_date(target_date).isoformat()
    override = index_overrides(room.get('id'), overrides).get(target)
    matches = covering_bookings(room, target, bookings)
    booking = matches[0] if matches else None

    ambiguous = None
    if len(matches) > 1:
        ambiguous = AmbiguousMatchWarning(room, target, matches)
        logger.warning(str(ambiguous))

    if override:
        status, source = override['status'], SOURCE_OVERRIDE
    elif booking:
        status, source = STATUS_OCCUPIED, SOURCE_BOOKING
    else:
        status, source = STATUS_AVAILABLE, SOURCE_DEFAULT

    capacity_exceeded = bool(
        booking and int(booking.get('guests') or 0) > int(room.get('capacity') or 0)
    )

    return {
        'date': target,
        'status': status,
        'source': source,
        'override': override,
        'booking': booking,
        'ambiguous': ambiguous,
        'capacity_exceeded': capacity_exceeded,
    }


def build_calendar(rooms: list, start, end, overrides: list, bookings: list) -> list:
    """
    Resolve a grid of rooms x dates.

    Returns:
        list: [{'room': room, 'days': {ISO date: status}}] in room order
    """
    return [
        {
            'room': room,
            'days': effective_status_range(room, start, end, overrides, bookings),
        }
        for room in rooms
    ]


def occupancy_rate(rooms: list, target_date, overrides: list, bookings: list) -> float:
    """
    Percentage of rooms whose effective status is 'occupied' on a date.

    Returns:
        float: 0-100, 0.0 when there are no rooms
    """
    if not rooms:
        return 0.0

    occupied = sum(
        1 for room in rooms
        if effective_status(room, target_date, overrides, bookings) == STATUS_OCCUPIED
    )
    return round(occupied * 100.0 / len(rooms), 1)


def _occupying_for_type(room: dict, bookings: list) -> list:
    return [
        b for b in bookings
        if b.get('status') in OCCUPYING_BOOKING_STATUSES
        and b.get('room_type') == room.get('room_type')
    ]
