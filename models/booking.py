"""
Booking model.
CRUD operations and queries for room bookings.

Bookings are made against a room type; rooms are never assigned at booking
time. Status changes go through models.booking_state.
"""

from typing import Optional

from database import get_db
from utils.constants import OCCUPYING_BOOKING_STATUSES, BOOKING_STATUSES
from utils.datetime_helpers import parse_date, InvalidDateError
from utils.validators import parse_amount, parse_count, sanitize_input


BOOKING_SELECT = '''
    SELECT b.*, c.name as customer_name, c.phone as customer_phone
    FROM bookings b
    JOIN customers c ON b.customer_id = c.id
'''

EDITABLE_FIELDS = (
    'check_in', 'check_out', 'room_type', 'guests',
    'total_amount', 'advance_paid', 'special_requests'
)


# =============================================================================
# VALIDATION
# =============================================================================

def validate_booking_fields(data: dict) -> dict:
    """
    Validate and normalize booking fields.

    Args:
        data: Raw booking fields (check_in, check_out, room_type, guests,
              total_amount, advance_paid, special_requests)

    Returns:
        dict: Normalized fields

    Raises:
        InvalidDateError: If dates are malformed or check_in >= check_out
        ValueError: If any other field is invalid
    """
    check_in = parse_date(data.get('check_in'))
    check_out = parse_date(data.get('check_out'))
    if check_in >= check_out:
        raise InvalidDateError("Check-out date must be after check-in date")

    room_type = sanitize_input(data.get('room_type'))
    if not room_type:
        raise ValueError("Room type is required")

    from models.room import get_room_types
    if room_type not in get_room_types():
        raise ValueError(f"Unknown room type: {room_type}")

    total_amount = parse_amount(data.get('total_amount', 0), 'Total amount')
    advance_paid = parse_amount(data.get('advance_paid', 0), 'Advance paid')
    if advance_paid > total_amount:
        raise ValueError("Advance paid cannot exceed the total amount")

    return {
        'check_in': check_in.isoformat(),
        'check_out': check_out.isoformat(),
        'room_type': room_type,
        'guests': parse_count(data.get('guests', 1), 'Guests', minimum=1),
        'total_amount': total_amount,
        'advance_paid': advance_paid,
        'special_requests': sanitize_input(data.get('special_requests'), 1000) or None,
    }


# =============================================================================
# CRUD OPERATIONS
# =============================================================================

def create_booking(customer_id: int, **fields) -> int:
    """
    Create a new booking in 'confirmed' status.

    Args:
        customer_id: Owning customer ID
        **fields: check_in, check_out, room_type, guests, total_amount,
                  advance_paid, special_requests

    Returns:
        int: New booking ID

    Raises:
        ValueError: If validation fails or the customer does not exist
    """
    from models.customer import get_customer_by_id

    if not get_customer_by_id(customer_id):
        raise ValueError("Customer not found")

    values = validate_booking_fields(fields)

    db = get_db()
    cursor = db.execute('''
        INSERT INTO bookings
        (customer_id, check_in, check_out, room_type, guests,
         total_amount, advance_paid, status, special_requests)
        VALUES (?, ?, ?, ?, ?, ?, ?, 'confirmed', ?)
    ''', (
        customer_id, values['check_in'], values['check_out'], values['room_type'],
        values['guests'], values['total_amount'], values['advance_paid'],
        values['special_requests']
    ))
    db.commit()
    return cursor.lastrowid


def get_booking_by_id(booking_id: int) -> Optional[dict]:
    """
    Get a booking by ID with customer name and phone.

    Args:
        booking_id: Booking ID

    Returns:
        dict or None: Booking data
    """
    db = get_db()
    row = db.execute(BOOKING_SELECT + ' WHERE b.id = ?', (booking_id,)).fetchone()
    return _with_balance(dict(row)) if row else None


def get_all_bookings(
    status: str = None,
    customer_id: int = None,
    search: str = None,
    date_from: str = None,
    date_to: str = None
) -> list:
    """
    List bookings with optional filters, newest check-in first.

    Args:
        status: Filter by status
        customer_id: Filter by customer
        search: Match on customer name, phone or room type
        date_from: Stays ending after this date
        date_to: Stays starting on or before this date

    Returns:
        list: Booking dicts
    """
    query = BOOKING_SELECT + ' WHERE 1=1'
    params = []

    if status:
        query += ' AND b.status = ?'
        params.append(status)

    if customer_id:
        query += ' AND b.customer_id = ?'
        params.append(customer_id)

    if search:
        query += ' AND (c.name LIKE ? OR c.phone LIKE ? OR b.room_type LIKE ?)'
        pattern = f'%{search}%'
        params.extend([pattern, pattern, pattern])

    if date_from:
        query += ' AND b.check_out > ?'
        params.append(parse_date(date_from).isoformat())

    if date_to:
        query += ' AND b.check_in <= ?'
        params.append(parse_date(date_to).isoformat())

    query += ' ORDER BY b.check_in DESC, b.id DESC'

    db = get_db()
    return [_with_balance(dict(row)) for row in db.execute(query, params).fetchall()]


def list_active_bookings(room_type: str = None, date_from: str = None, date_to: str = None) -> list:
    """
    List bookings that occupy dates (confirmed, checked_in).

    Args:
        room_type: Restrict to one room type
        date_from: Only stays ending after this date
        date_to: Only stays starting on or before this date

    Returns:
        list: Booking dicts ordered by check_in, created_at, id
    """
    placeholders = ','.join('?' * len(OCCUPYING_BOOKING_STATUSES))
    query = BOOKING_SELECT + f' WHERE b.status IN ({placeholders})'
    params = list(OCCUPYING_BOOKING_STATUSES)

    if room_type:
        query += ' AND b.room_type = ?'
        params.append(room_type)

    if date_from:
        query += ' AND b.check_out > ?'
        params.append(parse_date(date_from).isoformat())

    if date_to:
        query += ' AND b.check_in <= ?'
        params.append(parse_date(date_to).isoformat())

    query += ' ORDER BY b.check_in, b.created_at, b.id'

    db = get_db()
    return [dict(row) for row in db.execute(query, params).fetchall()]


def get_bookings_by_customer(customer_id: int) -> list:
    """Get all bookings of a customer."""
    return get_all_bookings(customer_id=customer_id)


def get_arrivals(target_date: str) -> list:
    """Get confirmed bookings checking in on a date."""
    db = get_db()
    rows = db.execute(BOOKING_SELECT + '''
        WHERE b.check_in = ? AND b.status = 'confirmed'
        ORDER BY c.name
    ''', (parse_date(target_date).isoformat(),)).fetchall()
    return [_with_balance(dict(row)) for row in rows]


def get_departures(target_date: str) -> list:
    """Get checked-in bookings checking out on a date."""
    db = get_db()
    rows = db.execute(BOOKING_SELECT + '''
        WHERE b.check_out = ? AND b.status = 'checked_in'
        ORDER BY c.name
    ''', (parse_date(target_date).isoformat(),)).fetchall()
    return [_with_balance(dict(row)) for row in rows]


def update_booking(booking_id: int, **fields) -> bool:
    """
    Update editable booking fields (not status).

    Args:
        booking_id: Booking ID
        **fields: Any of EDITABLE_FIELDS

    Returns:
        bool: True if updated, False if booking missing or nothing to update

    Raises:
        ValueError: If the merged booking fails validation or the booking is closed
    """
    booking = get_booking_by_id(booking_id)
    if not booking:
        return False

    changes = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
    if not changes:
        return False

    if booking['status'] in ('checked_out', 'cancelled'):
        raise ValueError(f"Cannot edit a {booking['status'].replace('_', ' ')} booking")

    merged = {k: booking[k] for k in EDITABLE_FIELDS}
    merged.update(changes)
    values = validate_booking_fields(merged)

    updates = [f'{field} = ?' for field in changes]
    params = [values[field] for field in changes]
    params.append(booking_id)

    db = get_db()
    db.execute(f'''
        UPDATE bookings
        SET {', '.join(updates)}, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', params)
    db.commit()
    return True


def update_booking_status(booking_id: int, status: str, commit: bool = True) -> bool:
    """
    Write a booking status. Callers validate the transition first.

    Args:
        booking_id: Booking ID
        status: New status
        commit: Commit immediately

    Returns:
        bool: True if a row was updated
    """
    if status not in BOOKING_STATUSES:
        raise ValueError(f"Invalid booking status: {status}")

    db = get_db()
    cursor = db.execute('''
        UPDATE bookings
        SET status = ?, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (status, booking_id))
    if commit:
        db.commit()
    return cursor.rowcount > 0


def _with_balance(booking: dict) -> dict:
    booking['balance_due'] = round(
        float(booking['total_amount'] or 0) - float(booking['advance_paid'] or 0), 2
    )
    return booking
