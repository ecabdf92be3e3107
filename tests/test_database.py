"""
Database tests.
Tests schema, seed data and table constraints.
"""

import sqlite3

import pytest
from database import get_db


def test_database_tables(app):
    """Test that all required tables exist."""
    db = get_db()
    tables = {row[0] for row in db.execute("SELECT name FROM sqlite_master WHERE type='table'")}

    required_tables = [
        'roles', 'users', 'rooms', 'room_availability', 'customers', 'bookings',
        'booking_status_history', 'staff', 'inventory', 'transactions'
    ]
    for table in required_tables:
        assert table in tables, f"Table {table} should exist"


def test_seed_data(app):
    """Test that seed data was created correctly."""
    db = get_db()

    admin = db.execute("SELECT username FROM users WHERE username='admin'").fetchone()
    assert admin is not None, "Admin user should exist"

    roles = {row['name'] for row in db.execute('SELECT name FROM roles')}
    assert roles == {'admin', 'manager', 'staff', 'viewer'}

    assert db.execute('SELECT COUNT(*) FROM rooms').fetchone()[0] == 5


def test_foreign_keys_enabled(app):
    assert get_db().execute('PRAGMA foreign_keys').fetchone()[0] == 1


def test_one_override_per_room_and_date(app, standard_room):
    db = get_db()
    db.execute(
        "INSERT INTO room_availability (room_id, date, status) VALUES (?, '2024-06-01', 'blocked')",
        (standard_room['id'],)
    )
    with pytest.raises(sqlite3.IntegrityError):
        db.execute(
            "INSERT INTO room_availability (room_id, date, status) VALUES (?, '2024-06-01', 'available')",
            (standard_room['id'],)
        )
    db.rollback()


def test_booking_date_order_constraint(app, customer_id):
    db = get_db()
    with pytest.raises(sqlite3.IntegrityError):
        db.execute('''
            INSERT INTO bookings (customer_id, check_in, check_out, room_type)
            VALUES (?, '2024-06-03', '2024-06-01', 'Suite')
        ''', (customer_id,))
    db.rollback()
