"""
Permission checking utilities.
Role permissions are stored as a JSON object of area flags, e.g.
{"all": true} or {"bookings": true, "reports": true}.
"""

import json

from database import get_db


def load_user_permissions(user_id: int) -> dict:
    """
    Load the permission flags of a user's role.

    Args:
        user_id: User ID

    Returns:
        dict of permission flags (empty if user or role is missing)
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT r.permissions
        FROM users u
        JOIN roles r ON u.role_id = r.id
        WHERE u.id = ?
    ''', (user_id,))
    row = cursor.fetchone()

    if not row or not row['permissions']:
        return {}

    return json.loads(row['permissions'])


def permits(permissions: dict, permission_code: str) -> bool:
    """Check a permission flag, honouring the 'all' wildcard."""
    return permissions.get('all') is True or permissions.get(permission_code) is True

