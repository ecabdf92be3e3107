"""
Room API routes.
Endpoints for room inventory management.
"""

import logging
from flask import request
from flask_login import login_required

from models.room import (
    get_all_rooms,
    get_room_by_id,
    create_room,
    update_room,
    deactivate_room,
    get_room_types,
)
from utils.api_response import api_success, api_error, api_not_found, get_json_payload
from utils.decorators import permission_required
from utils.messages import MESSAGES

logger = logging.getLogger(__name__)


def register_routes(bp):
    """Register room routes on the blueprint."""

    @bp.route('/rooms', methods=['GET'])
    @login_required
    @permission_required('rooms')
    def list_rooms():
        """
        List rooms.

        Query params:
            room_type: Filter by type
            search: Match on room number or type
            include_inactive: 'true' to include deactivated rooms
        """
        rooms = get_all_rooms(
            room_type=request.args.get('room_type') or None,
            search=request.args.get('search') or None,
            active_only=request.args.get('include_inactive', '').lower() != 'true'
        )
        return api_success(data={'rooms': rooms, 'count': len(rooms)})

    @bp.route('/rooms/types', methods=['GET'])
    @login_required
    @permission_required('rooms')
    def list_room_types():
        """Bookable room types."""
        return api_success(data={'room_types': get_room_types()})

    @bp.route('/rooms/<int:room_id>', methods=['GET'])
    @login_required
    @permission_required('rooms')
    def get_room(room_id):
        room = get_room_by_id(room_id)
        if not room:
            return api_not_found('Room')
        return api_success(data={'room': room})

    @bp.route('/rooms', methods=['POST'])
    @login_required
    @permission_required('rooms')
    def create_room_route():
        """
        Create a room.

        Request body:
            room_number, room_type (required); capacity, base_price,
            amenities, description
        """
        data = get_json_payload()
        try:
            room_id = create_room(
                room_number=data.get('room_number'),
                room_type=data.get('room_type'),
                capacity=data.get('capacity'),
                base_price=data.get('base_price'),
                amenities=data.get('amenities'),
                description=data.get('description')
            )
        except ValueError as e:
            return api_error(str(e))

        logger.info("Room %s created", room_id)
        return api_success(
            data={'room': get_room_by_id(room_id)},
            message=MESSAGES['room_created'],
            status=201
        )

    @bp.route('/rooms/<int:room_id>', methods=['PATCH'])
    @login_required
    @permission_required('rooms')
    def update_room_route(room_id):
        if not get_room_by_id(room_id):
            return api_not_found('Room')

        data = get_json_payload()
        try:
            update_room(room_id, **data)
        except (TypeError, ValueError) as e:
            return api_error(str(e))

        return api_success(data={'room': get_room_by_id(room_id)}, message=MESSAGES['room_updated'])

    @bp.route('/rooms/<int:room_id>', methods=['DELETE'])
    @login_required
    @permission_required('rooms')
    def delete_room_route(room_id):
        """Deactivate a room; its history is kept."""
        if not deactivate_room(room_id):
            return api_not_found('Room')
        return api_success(message=MESSAGES['room_deactivated'])
