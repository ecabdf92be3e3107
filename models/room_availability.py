"""
Room availability override storage.
One row per (room_id, date); writing the same pair again replaces it.
"""

from typing import Optional

from database import get_db
from utils.constants import ROOM_AVAILABILITY_STATUSES
from utils.datetime_helpers import parse_date, parse_date_range


def upsert_override(
    room_id: int,
    target_date,
    status: str,
    notes: str = None,
    updated_by: str = None,
    commit: bool = True
) -> int:
    """
    Insert or replace the override for (room_id, date). Last write wins.

    Args:
        room_id: Room ID
        target_date: Date (YYYY-MM-DD or date)
        status: available, occupied, maintenance or blocked
        notes: Optional notes
        updated_by: Username writing the override
        commit: Commit immediately

    Returns:
        int: Override row ID

    Raises:
        InvalidDateError: If the date is malformed
        ValueError: If the status is unknown
    """
    day = parse_date(target_date).isoformat()
    if status not in ROOM_AVAILABILITY_STATUSES:
        raise ValueError(f"Invalid room status: {status}")

    db = get_db()
    db.execute('''
        INSERT INTO room_availability (room_id, date, status, notes, updated_by)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(room_id, date) DO UPDATE SET
            status = excluded.status,
            notes = excluded.notes,
            updated_by = excluded.updated_by,
            updated_at = CURRENT_TIMESTAMP
    ''', (room_id, day, status, notes, updated_by))
    if commit:
        db.commit()

    row = db.execute(
        'SELECT id FROM room_availability WHERE room_id = ? AND date = ?', (room_id, day)
    ).fetchone()
    return row['id']


def get_override(room_id: int, target_date) -> Optional[dict]:
    """
    Get the override for a room on a date.

    Returns:
        dict or None: Override data if one exists
    """
    db = get_db()
    row = db.execute('''
        SELECT * FROM room_availability
        WHERE room_id = ? AND date = ?
    ''', (room_id, parse_date(target_date).isoformat())).fetchone()
    return dict(row) if row else None


def list_overrides(room_id: int, start, end) -> list:
    """
    Get a room's overrides within [start, end].

    Returns:
        list: Overrides ordered by date
    """
    start_date, end_date = parse_date_range(start, end)
    db = get_db()
    rows = db.execute('''
        SELECT * FROM room_availability
        WHERE room_id = ? AND date BETWEEN ? AND ?
        ORDER BY date
    ''', (room_id, start_date.isoformat(), end_date.isoformat())).fetchall()
    return [dict(row) for row in rows]


def list_overrides_for_range(start, end, room_ids: list = None) -> list:
    """
    Get overrides of all (or some) rooms within [start, end].

    Args:
        start: Range start
        end: Range end
        room_ids: Optional room ID filter

    Returns:
        list: Overrides ordered by room and date
    """
    start_date, end_date = parse_date_range(start, end)
    query = '''
        SELECT a.*, r.room_number
        FROM room_availability a
        JOIN rooms r ON a.room_id = r.id
        WHERE a.date BETWEEN ? AND ?
    '''
    params = [start_date.isoformat(), end_date.isoformat()]

    if room_ids:
        query += f" AND a.room_id IN ({','.join('?' * len(room_ids))})"
        params.extend(room_ids)

    query += ' ORDER BY a.room_id, a.date'

    db = get_db()
    return [dict(row) for row in db.execute(query, params).fetchall()]


def delete_override(room_id: int, target_date) -> bool:
    """
    Remove the override for (room_id, date) so inference applies again.

    Returns:
        bool: True if an override was deleted
    """
    db = get_db()
    cursor = db.execute('''
        DELETE FROM room_availability
        WHERE room_id = ? AND date = ?
    ''', (room_id, parse_date(target_date).isoformat()))
    db.commit()
    return cursor.rowcount > 0
