"""
User model and data access functions.
Handles user authentication lookups and Flask-Login integration.
"""

import json

from werkzeug.security import generate_password_hash, check_password_hash
from database import get_db


class User:
    """
    User class for Flask-Login integration.
    Wraps database row dictionary with required Flask-Login properties.
    """

    def __init__(self, user_dict):
        """
        Initialize User from database row.

        Args:
            user_dict: Dictionary with user data from database
        """
        self.id = user_dict['id']
        self.username = user_dict['username']
        self.email = user_dict.get('email')
        self.full_name = user_dict['full_name']
        self.role_id = user_dict['role_id']
        self.role_name = user_dict.get('role_name')
        self.permissions = json.loads(user_dict.get('role_permissions') or '{}')
        self.active = user_dict['active']
        self.last_login = user_dict.get('last_login')

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return self.active == 1

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    def get_id(self):
        """Required by Flask-Login. Returns user ID as unicode string."""
        return str(self.id)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'full_name': self.full_name,
            'role': self.role_name,
            'permissions': self.permissions,
            'last_login': self.last_login,
        }


USER_SELECT = '''
    SELECT u.*, r.name as role_name, r.permissions as role_permissions
    FROM users u
    LEFT JOIN roles r ON u.role_id = r.id
'''


def get_user_by_id(user_id: int) -> dict:
    """
    Get user by ID.

    Args:
        user_id: User ID

    Returns:
        User dict or None if not found
    """
    db = get_db()
    row = db.execute(USER_SELECT + ' WHERE u.id = ?', (user_id,)).fetchone()
    return dict(row) if row else None


def get_user_by_username(username: str) -> dict:
    """
    Get user by username.

    Args:
        username: Username to search for

    Returns:
        User dict or None if not found
    """
    db = get_db()
    row = db.execute(USER_SELECT + ' WHERE u.username = ?', (username,)).fetchone()
    return dict(row) if row else None


def get_role_by_name(name: str) -> dict:
    """Get a role by name, or None."""
    db = get_db()
    row = db.execute('SELECT * FROM roles WHERE name = ?', (name,)).fetchone()
    return dict(row) if row else None


def create_user(username: str, password: str, full_name: str, role_id: int, email: str = None) -> int:
    """
    Create new user with hashed password.

    Args:
        username: Unique username
        password: Plain text password (will be hashed)
        full_name: User's full name
        role_id: Role ID to assign
        email: Optional unique email

    Returns:
        New user ID

    Raises:
        sqlite3.IntegrityError if username or email already exists
    """
    db = get_db()
    password_hash = generate_password_hash(password)

    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO users (username, email, password_hash, full_name, role_id)
        VALUES (?, ?, ?, ?, ?)
    ''', (username, email, password_hash, full_name, role_id))

    db.commit()
    return cursor.lastrowid


def update_last_login(user_id: int) -> None:
    """
    Update user's last login timestamp.

    Args:
        user_id: User ID
    """
    db = get_db()
    db.execute('''
        UPDATE users
        SET last_login = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (user_id,))
    db.commit()


def check_password(user_dict: dict, password: str) -> bool:
    """
    Check if password matches user's hashed password.

    Args:
        user_dict: User dictionary from database
        password: Plain text password to check

    Returns:
        True if password matches
    """
    return check_password_hash(user_dict['password_hash'], password)
