"""
Booking status management.
Handles validated status transitions and status history.
"""

from datetime import date

from database import get_db
from utils.constants import BOOKING_STATUSES, TERMINAL_BOOKING_STATUSES
from utils.datetime_helpers import parse_date, get_today


# =============================================================================
# CONSTANTS
# =============================================================================

# Allowed transitions; checked_out and cancelled are terminal.
VALID_TRANSITIONS = {
    'confirmed': ('checked_in', 'cancelled'),
    'checked_in': ('checked_out', 'cancelled'),
    'checked_out': (),
    'cancelled': (),
}


class InvalidTransitionError(ValueError):
    """Raised when a booking status change is not allowed."""

    def __init__(self, from_status: str, to_status: str, reason: str = None):
        self.from_status = from_status
        self.to_status = to_status
        self.reason = reason
        message = f"Cannot change booking status from '{from_status}' to '{to_status}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    def to_dict(self) -> dict:
        return {'from': self.from_status, 'to': self.to_status, 'reason': self.reason}


# =============================================================================
# VALIDATION
# =============================================================================

def get_valid_transitions(from_status: str) -> tuple:
    """Get the statuses reachable from a status."""
    return VALID_TRANSITIONS.get(from_status, ())


def is_terminal(status: str) -> bool:
    return status in TERMINAL_BOOKING_STATUSES


def validate_booking_transition(
    booking: dict,
    to_status: str,
    today: date = None,
    enforce_window: bool = True
) -> None:
    """
    Validate a booking status change.

    Checking in is only allowed during the stay window
    (check_in <= today < check_out) unless enforce_window is False.

    Args:
        booking: Booking dict (status, check_in, check_out)
        to_status: Target status
        today: Reference date for the check-in window (defaults to today in the configured timezone)
        enforce_window: Apply the check-in window rule

    Raises:
        InvalidTransitionError: If the transition is not allowed
    """
    from_status = booking.get('status')

    if to_status not in BOOKING_STATUSES:
        raise InvalidTransitionError(from_status, to_status, 'unknown status')

    if to_status not in get_valid_transitions(from_status):
        reason = 'booking is closed' if is_terminal(from_status) else None
        raise InvalidTransitionError(from_status, to_status, reason)

    if to_status == 'checked_in' and enforce_window:
        today = today or get_today()
        check_in = parse_date(booking['check_in'])
        check_out = parse_date(booking['check_out'])
        if not check_in <= today < check_out:
            raise InvalidTransitionError(
                from_status, to_status,
                f"check-in is only possible from {check_in.isoformat()} "
                f"until before {check_out.isoformat()}"
            )


def transition_booking(
    booking: dict,
    to_status: str,
    today: date = None,
    enforce_window: bool = True
) -> dict:
    """
    Apply a status transition to a booking dict without persisting it.

    Returns:
        dict: Copy of the booking with the new status

    Raises:
        InvalidTransitionError: If the transition is not allowed
    """
    validate_booking_transition(booking, to_status, today=today, enforce_window=enforce_window)
    updated = dict(booking)
    updated['status'] = to_status
    return updated


# =============================================================================
# PERSISTED TRANSITIONS
# =============================================================================

def change_booking_status(
    booking_id: int,
    to_status: str,
    changed_by: str = None,
    notes: str = '',
    today: date = None,
    enforce_window: bool = True
) -> dict:
    """
    Validate and persist a booking status change, recording history.

    Args:
        booking_id: Booking ID
        to_status: Target status
        changed_by: Username making the change
        notes: Optional notes
        today: Reference date for the check-in window
        enforce_window: Apply the check-in window rule

    Returns:
        dict: Updated booking, or None if the booking does not exist

    Raises:
        InvalidTransitionError: If the transition is not allowed
    """
    from models.booking import get_booking_by_id, update_booking_status

    booking = get_booking_by_id(booking_id)
    if not booking:
        return None

    transition_booking(booking, to_status, today=today, enforce_window=enforce_window)

    db = get_db()
    try:
        update_booking_status(booking_id, to_status, commit=False)
        db.execute('''
            INSERT INTO booking_status_history
            (booking_id, from_status, to_status, changed_by, notes)
            VALUES (?, ?, ?, ?, ?)
        ''', (booking_id, booking['status'], to_status, changed_by, notes))
        db.commit()
    except Exception:
        db.rollback()
        raise

    return get_booking_by_id(booking_id)


def cancel_booking(booking_id: int, cancelled_by: str = None, notes: str = '') -> dict:
    """Shortcut for a transition to 'cancelled'."""
    return change_booking_status(booking_id, 'cancelled', changed_by=cancelled_by, notes=notes)


def get_status_history(booking_id: int) -> list:
    """
    Get status change history for a booking.

    Args:
        booking_id: Booking ID

    Returns:
        list: History entries, newest first
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT * FROM booking_status_history
        WHERE booking_id = ?
        ORDER BY created_at DESC, id DESC
    ''', (booking_id,))
    return [dict(r) for r in cursor.fetchall()]
