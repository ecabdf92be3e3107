"""
Route decorators for authentication and authorization.
Provides permission-based access control for routes.
"""

from functools import wraps
from flask import g
from flask_login import login_required, current_user

from utils.api_response import api_error
from utils.messages import MESSAGES


def permission_required(permission_code: str):
    """
    Decorator to require specific permission for a route.

    Usage:
        @bp.route('/rooms')
        @login_required
        @permission_required('rooms')
        def list_rooms():
            ...

    Args:
        permission_code: Area flag required (e.g., 'bookings', 'reports')

    Returns:
        Decorator function
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            # Load permissions once per request
            if not hasattr(g, 'user_permissions'):
                from utils.permissions import load_user_permissions
                g.user_permissions = load_user_permissions(current_user.id)

            from utils.permissions import permits
            if not permits(g.user_permissions, permission_code):
                return api_error(MESSAGES['permission_denied'], status=403)

            return func(*args, **kwargs)
        return wrapper
    return decorator


# Re-export login_required for convenience
__all__ = ['login_required', 'permission_required']
