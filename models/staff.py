"""
Staff model.
CRUD operations for resort staff and payroll totals.
"""

from typing import Optional

from database import get_db
from utils.constants import STAFF_POSITIONS, STAFF_STATUSES
from utils.datetime_helpers import parse_date, get_today
from utils.validators import require_text, sanitize_input, parse_amount, validate_email, validate_phone


def _clean_staff_fields(fields: dict, partial: bool = False) -> dict:
    values = {}

    for field in ('name', 'phone'):
        if field in fields or not partial:
            values[field] = require_text(fields.get(field), field.capitalize())

    if 'phone' in values and not validate_phone(values['phone']):
        raise ValueError("Invalid phone number")

    if 'position' in fields or not partial:
        position = sanitize_input(fields.get('position'))
        if position not in STAFF_POSITIONS:
            raise ValueError(f"Invalid position: {position or '(empty)'}")
        values['position'] = position

    if 'salary' in fields or not partial:
        values['salary'] = parse_amount(fields.get('salary'), 'Salary')

    if 'status' in fields:
        if fields['status'] not in STAFF_STATUSES:
            raise ValueError(f"Invalid staff status: {fields['status']}")
        values['status'] = fields['status']

    if fields.get('hire_date'):
        values['hire_date'] = parse_date(fields['hire_date']).isoformat()

    if 'email' in fields:
        email = sanitize_input(fields.get('email'), 200) or None
        if email and not validate_email(email):
            raise ValueError("Invalid email format")
        values['email'] = email

    if 'address' in fields:
        values['address'] = sanitize_input(fields.get('address'), 500) or None

    return values


def create_staff(**fields) -> int:
    """
    Create a staff member.

    Args:
        **fields: name, phone, position, salary (required); email, address,
                  hire_date (defaults to today), status (defaults to active)

    Returns:
        int: Staff ID

    Raises:
        ValueError: If validation fails
    """
    values = _clean_staff_fields(fields)
    values.setdefault('hire_date', get_today().isoformat())
    columns = ', '.join(values)
    placeholders = ', '.join('?' * len(values))

    db = get_db()
    cursor = db.execute(
        f'INSERT INTO staff ({columns}) VALUES ({placeholders})', list(values.values())
    )
    db.commit()
    return cursor.lastrowid


def get_staff_by_id(staff_id: int) -> Optional[dict]:
    db = get_db()
    row = db.execute('SELECT * FROM staff WHERE id = ?', (staff_id,)).fetchone()
    return dict(row) if row else None


def get_all_staff(position: str = None, status: str = None, search: str = None) -> list:
    """
    List staff ordered by name.

    Args:
        position: Filter by position
        status: Filter by active/inactive
        search: Match on name, phone or email

    Returns:
        list: Staff dicts
    """
    query = 'SELECT * FROM staff WHERE 1=1'
    params = []

    if position:
        query += ' AND position = ?'
        params.append(position)

    if status:
        query += ' AND status = ?'
        params.append(status)

    if search:
        query += ' AND (name LIKE ? OR phone LIKE ? OR email LIKE ?)'
        pattern = f'%{search}%'
        params.extend([pattern, pattern, pattern])

    query += ' ORDER BY name'

    db = get_db()
    return [dict(row) for row in db.execute(query, params).fetchall()]


def update_staff(staff_id: int, **fields) -> bool:
    values = _clean_staff_fields(fields, partial=True)
    if not values:
        return False

    updates = [f'{field} = ?' for field in values]
    params = list(values.values()) + [staff_id]

    db = get_db()
    cursor = db.execute(f'''
        UPDATE staff
        SET {', '.join(updates)}, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', params)
    db.commit()
    return cursor.rowcount > 0


def delete_staff(staff_id: int) -> bool:
    db = get_db()
    cursor = db.execute('DELETE FROM staff WHERE id = ?', (staff_id,))
    db.commit()
    return cursor.rowcount > 0


def get_payroll_summary() -> dict:
    """
    Monthly payroll of active staff.

    Returns:
        dict: {'active_count': int, 'total_salary': float, 'by_position': {position: total}}
    """
    db = get_db()
    rows = db.execute('''
        SELECT position, COUNT(*) as n, SUM(salary) as total
        FROM staff
        WHERE status = 'active'
        GROUP BY position
        ORDER BY position
    ''').fetchall()

    return {
        'active_count': sum(row['n'] for row in rows),
        'total_salary': round(sum(row['total'] for row in rows), 2),
        'by_position': {row['position']: round(row['total'], 2) for row in rows},
    }
