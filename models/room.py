"""
Room model.
CRUD operations for rooms. Rooms are soft-deleted (is_active = 0) so
booking history keeps its references.
"""

import json
import sqlite3
from typing import Optional

from database import get_db
from utils.constants import ROOM_TYPES, DEFAULT_ROOM_PRICES, DEFAULT_ROOM_CAPACITY, AMENITIES
from utils.validators import validate_room_number, parse_amount, parse_count, sanitize_input


def _row_to_room(row) -> dict:
    room = dict(row)
    room['amenities'] = json.loads(room.get('amenities') or '[]')
    return room


def _clean_amenities(amenities) -> list:
    if amenities is None:
        return []
    if not isinstance(amenities, (list, tuple)):
        raise ValueError("Amenities must be a list")
    unknown = [a for a in amenities if a not in AMENITIES]
    if unknown:
        raise ValueError(f"Unknown amenities: {', '.join(map(str, unknown))}")
    # Keep first occurrence order
    return list(dict.fromkeys(amenities))


# =============================================================================
# QUERIES
# =============================================================================

def get_room_by_id(room_id: int) -> Optional[dict]:
    """
    Get a room by ID (active or not).

    Args:
        room_id: Room ID

    Returns:
        dict or None: Room data with amenities as a list
    """
    db = get_db()
    row = db.execute('SELECT * FROM rooms WHERE id = ?', (room_id,)).fetchone()
    return _row_to_room(row) if row else None


def get_room_by_number(room_number: str) -> Optional[dict]:
    """Get a room by its room number."""
    db = get_db()
    row = db.execute('SELECT * FROM rooms WHERE room_number = ?', (room_number,)).fetchone()
    return _row_to_room(row) if row else None


def get_all_rooms(room_type: str = None, search: str = None, active_only: bool = True) -> list:
    """
    Get rooms ordered by room number.

    Args:
        room_type: Filter by room type
        search: Match on room number or room type
        active_only: Exclude deactivated rooms

    Returns:
        list: Room dicts
    """
    query = 'SELECT * FROM rooms WHERE 1=1'
    params = []

    if active_only:
        query += ' AND is_active = 1'

    if room_type:
        query += ' AND room_type = ?'
        params.append(room_type)

    if search:
        query += ' AND (room_number LIKE ? OR room_type LIKE ?)'
        params.extend([f'%{search}%', f'%{search}%'])

    query += ' ORDER BY room_number'

    db = get_db()
    return [_row_to_room(row) for row in db.execute(query, params).fetchall()]


def get_room_types() -> list:
    """
    Get bookable room types: the standard types plus any custom type in use.

    Returns:
        list: Room type names
    """
    db = get_db()
    rows = db.execute(
        'SELECT DISTINCT room_type FROM rooms WHERE is_active = 1 ORDER BY room_type'
    ).fetchall()
    in_use = [row['room_type'] for row in rows]
    return ROOM_TYPES + [t for t in in_use if t not in ROOM_TYPES]


# =============================================================================
# CRUD OPERATIONS
# =============================================================================

def create_room(
    room_number: str,
    room_type: str,
    capacity: int = None,
    base_price: float = None,
    amenities: list = None,
    description: str = None
) -> int:
    """
    Create a new room.

    Capacity and base price default to the standard values of the room type.

    Args:
        room_number: Unique room label
        room_type: Room type name
        capacity: Max guests
        base_price: Nightly price
        amenities: Amenity labels
        description: Free text

    Returns:
        int: Room ID

    Raises:
        ValueError: If validation fails or the room number is taken
    """
    room_number = sanitize_input(room_number)
    if not validate_room_number(room_number):
        raise ValueError("Room number must be 1-10 letters or digits")

    room_type = sanitize_input(room_type)
    if not room_type:
        raise ValueError("Room type is required")

    if capacity is None:
        capacity = DEFAULT_ROOM_CAPACITY.get(room_type, 2)
    if base_price is None:
        base_price = DEFAULT_ROOM_PRICES.get(room_type, 0)

    values = (
        room_number.upper(),
        room_type,
        parse_count(capacity, 'Capacity', minimum=1),
        parse_amount(base_price, 'Base price'),
        json.dumps(_clean_amenities(amenities)),
        sanitize_input(description, 500) or None,
    )

    db = get_db()
    try:
        cursor = db.execute('''
            INSERT INTO rooms (room_number, room_type, capacity, base_price, amenities, description)
            VALUES (?, ?, ?, ?, ?, ?)
        ''', values)
        db.commit()
    except sqlite3.IntegrityError:
        db.rollback()
        raise ValueError(f"Room {values[0]} already exists") from None
    return cursor.lastrowid


def update_room(room_id: int, **fields) -> bool:
    """
    Update room fields.

    Args:
        room_id: Room ID
        **fields: room_type, capacity, base_price, amenities, description, is_active

    Returns:
        bool: True if updated
    """
    updates = []
    params = []

    if 'room_type' in fields:
        room_type = sanitize_input(fields['room_type'])
        if not room_type:
            raise ValueError("Room type is required")
        updates.append('room_type = ?')
        params.append(room_type)

    if 'capacity' in fields:
        updates.append('capacity = ?')
        params.append(parse_count(fields['capacity'], 'Capacity', minimum=1))

    if 'base_price' in fields:
        updates.append('base_price = ?')
        params.append(parse_amount(fields['base_price'], 'Base price'))

    if 'amenities' in fields:
        updates.append('amenities = ?')
        params.append(json.dumps(_clean_amenities(fields['amenities'])))

    if 'description' in fields:
        updates.append('description = ?')
        params.append(sanitize_input(fields['description'], 500) or None)

    if 'is_active' in fields:
        updates.append('is_active = ?')
        params.append(1 if fields['is_active'] else 0)

    if not updates:
        return False

    params.append(room_id)

    db = get_db()
    cursor = db.execute(f'''
        UPDATE rooms
        SET {', '.join(updates)}, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', params)
    db.commit()
    return cursor.rowcount > 0


def deactivate_room(room_id: int) -> bool:
    """
    Soft-delete a room.

    Args:
        room_id: Room ID

    Returns:
        bool: True if the room existed
    """
    return update_room(room_id, is_active=False)
