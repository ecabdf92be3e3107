"""
Database seed data.
Initial data population for fresh database installations.
"""

import json
from werkzeug.security import generate_password_hash

from utils.constants import ROOM_TYPES, DEFAULT_ROOM_PRICES, DEFAULT_ROOM_CAPACITY


def seed_database(db):
    """Insert initial seed data."""

    # 1. Create Roles
    roles_data = [
        ('admin', 'Full system access', {'all': True}),
        ('manager', 'Management access',
         {'bookings': True, 'rooms': True, 'calendar': True, 'customers': True, 'reports': True,
          'staff': True, 'inventory': True, 'transactions': True}),
        ('staff', 'Basic staff access',
         {'bookings': True, 'rooms': True, 'calendar': True, 'customers': True}),
        ('viewer', 'Read-only access', {'reports': True})
    ]

    for name, description, permissions in roles_data:
        db.execute('''
            INSERT INTO roles (name, description, permissions)
            VALUES (?, ?, ?)
        ''', (name, description, json.dumps(permissions)))

    # 2. Create default admin user
    admin_role_id = db.execute("SELECT id FROM roles WHERE name = 'admin'").fetchone()[0]
    db.execute('''
        INSERT INTO users (username, email, password_hash, full_name, role_id)
        VALUES (?, ?, ?, ?, ?)
    ''', ('admin', 'admin@ashokaresort.local', generate_password_hash('admin123'),
          'System Administrator', admin_role_id))

    # 3. Create one sample room per type
    for index, room_type in enumerate(ROOM_TYPES, start=1):
        db.execute('''
            INSERT INTO rooms (room_number, room_type, capacity, base_price, amenities)
            VALUES (?, ?, ?, ?, ?)
        ''', (
            f'{index}01',
            room_type,
            DEFAULT_ROOM_CAPACITY[room_type],
            DEFAULT_ROOM_PRICES[room_type],
            json.dumps(['AC', 'TV', 'WiFi'])
        ))
