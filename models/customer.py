"""
Customer model.
CRUD operations and search for resort customers.
"""

from typing import Optional

from database import get_db
from utils.validators import require_text, sanitize_input, validate_email, validate_phone


def _clean_customer_fields(fields: dict, partial: bool = False) -> dict:
    values = {}

    for field in ('name', 'phone'):
        if field in fields or not partial:
            values[field] = require_text(fields.get(field), field.capitalize())

    if 'phone' in values and not validate_phone(values['phone']):
        raise ValueError("Invalid phone number")

    if 'email' in fields:
        email = sanitize_input(fields.get('email'), 200) or None
        if email and not validate_email(email):
            raise ValueError("Invalid email format")
        values['email'] = email

    if 'address' in fields:
        values['address'] = sanitize_input(fields.get('address'), 500) or None

    return values


def create_customer(name: str, phone: str, email: str = None, address: str = None) -> int:
    """
    Create a new customer.

    Args:
        name: Customer name (required)
        phone: Phone number (required)
        email: Optional email
        address: Optional address

    Returns:
        int: Customer ID

    Raises:
        ValueError: If validation fails
    """
    values = _clean_customer_fields(
        {'name': name, 'phone': phone, 'email': email, 'address': address}
    )

    db = get_db()
    cursor = db.execute('''
        INSERT INTO customers (name, phone, email, address)
        VALUES (?, ?, ?, ?)
    ''', (values['name'], values['phone'], values['email'], values['address']))
    db.commit()
    return cursor.lastrowid


def get_customer_by_id(customer_id: int) -> Optional[dict]:
    """
    Get a customer with booking counters.

    Args:
        customer_id: Customer ID

    Returns:
        dict or None: Customer data
    """
    db = get_db()
    row = db.execute('''
        SELECT c.*,
               (SELECT COUNT(*) FROM bookings b
                WHERE b.customer_id = c.id AND b.status != 'cancelled') as total_bookings,
               (SELECT COALESCE(SUM(b.total_amount), 0) FROM bookings b
                WHERE b.customer_id = c.id AND b.status != 'cancelled') as total_spent
        FROM customers c
        WHERE c.id = ?
    ''', (customer_id,)).fetchone()
    return dict(row) if row else None


def get_all_customers(search: str = None) -> list:
    """
    List customers ordered by name.

    Args:
        search: Match on name, phone or email

    Returns:
        list: Customer dicts
    """
    query = 'SELECT * FROM customers'
    params = []

    if search:
        query += ' WHERE name LIKE ? OR phone LIKE ? OR email LIKE ?'
        pattern = f'%{search}%'
        params.extend([pattern, pattern, pattern])

    query += ' ORDER BY name'

    db = get_db()
    return [dict(row) for row in db.execute(query, params).fetchall()]


def update_customer(customer_id: int, **fields) -> bool:
    """
    Update customer fields.

    Args:
        customer_id: Customer ID
        **fields: name, phone, email, address

    Returns:
        bool: True if updated
    """
    values = _clean_customer_fields(fields, partial=True)
    if not values:
        return False

    updates = [f'{field} = ?' for field in values]
    params = list(values.values()) + [customer_id]

    db = get_db()
    cursor = db.execute(f'''
        UPDATE customers
        SET {', '.join(updates)}, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', params)
    db.commit()
    return cursor.rowcount > 0


def delete_customer(customer_id: int) -> bool:
    """
    Delete a customer. Refused while the customer has active bookings.

    Returns:
        bool: True if deleted

    Raises:
        ValueError: If the customer has confirmed or checked-in bookings
    """
    db = get_db()
    active = db.execute('''
        SELECT COUNT(*) as n FROM bookings
        WHERE customer_id = ? AND status IN ('confirmed', 'checked_in')
    ''', (customer_id,)).fetchone()['n']
    if active:
        raise ValueError("Cannot delete a customer with active bookings")

    cursor = db.execute('DELETE FROM customers WHERE id = ?', (customer_id,))
    db.commit()
    return cursor.rowcount > 0
