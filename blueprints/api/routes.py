"""
Public API routes.
Health check and reference vocabularies used by forms.
"""

from flask import Blueprint, current_app
from flask_login import login_required

from utils.api_response import api_success
from utils import constants

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint (no authentication required).

    Returns:
        JSON with status and version
    """
    return api_success(data={
        'status': 'ok',
        'version': current_app.config.get('APP_VERSION'),
        'app': current_app.config.get('APP_NAME')
    })


@api_bp.route('/constants')
@login_required
def api_constants():
    """Reference lists: room types, statuses, sources, categories, units."""
    return api_success(data={
        'room_types': constants.ROOM_TYPES,
        'default_room_prices': constants.DEFAULT_ROOM_PRICES,
        'default_room_capacity': constants.DEFAULT_ROOM_CAPACITY,
        'amenities': constants.AMENITIES,
        'booking_statuses': constants.BOOKING_STATUSES,
        'room_availability_statuses': constants.ROOM_AVAILABILITY_STATUSES,
        'income_sources': constants.INCOME_SOURCES,
        'expense_categories': constants.EXPENSE_CATEGORIES,
        'staff_positions': constants.STAFF_POSITIONS,
        'inventory_categories': constants.INVENTORY_CATEGORIES,
        'inventory_units': constants.INVENTORY_UNITS,
        'currency': current_app.config.get('CURRENCY'),
    })
