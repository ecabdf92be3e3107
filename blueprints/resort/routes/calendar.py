"""
Room calendar API routes.
Effective room status, calendar grid and manual status overrides.
"""

import logging
from flask import request
from flask_login import login_required, current_user

from models.room_calendar import (
    get_effective_status,
    get_effective_status_range,
    get_matching_booking,
    get_room_day,
    get_calendar,
    get_calendar_view,
    get_occupancy_rate,
    set_override,
    set_override_range,
    clear_override,
)
from utils.api_response import api_success, api_error, get_json_payload
from utils.datetime_helpers import get_today
from utils.decorators import permission_required
from utils.messages import MESSAGES

logger = logging.getLogger(__name__)


def _error_status(error: ValueError) -> int:
    return 404 if str(error) == 'Room not found' else 400


def _conflict_warning(conflicts: list) -> str:
    if not conflicts:
        return None
    dates = sorted({day for c in conflicts for day in c['dates']})
    return MESSAGES['override_conflicts_booking'].format(dates=', '.join(dates))


def register_routes(bp):
    """Register calendar and override routes on the blueprint."""

    # ============================================================================
    # STATUS QUERIES
    # ============================================================================

    @bp.route('/rooms/<int:room_id>/status', methods=['GET'])
    @login_required
    @permission_required('calendar')
    def room_status(room_id):
        """
        Effective status of a room on a date.

        Query params:
            date: YYYY-MM-DD (default: today)
        """
        target = request.args.get('date') or get_today()
        try:
            status = get_effective_status(room_id, target)
        except ValueError as e:
            return api_error(str(e), _error_status(e))

        return api_success(data={'room_id': room_id, 'date': str(target), 'status': status})

    @bp.route('/rooms/<int:room_id>/status-range', methods=['GET'])
    @login_required
    @permission_required('calendar')
    def room_status_range(room_id):
        """
        Effective status of a room for every date in [start, end].

        Query params:
            start: YYYY-MM-DD
            end: YYYY-MM-DD
        """
        start = request.args.get('start')
        end = request.args.get('end')
        if not start or not end:
            return api_error('start and end are required')

        try:
            statuses = get_effective_status_range(room_id, start, end)
        except ValueError as e:
            return api_error(str(e), _error_status(e))

        return api_success(data={'room_id': room_id, 'statuses': statuses})

    @bp.route('/rooms/<int:room_id>/booking', methods=['GET'])
    @login_required
    @permission_required('calendar')
    def room_booking(room_id):
        """Booking shown for a room on a date (null when none covers it)."""
        target = request.args.get('date') or get_today()
        try:
            booking = get_matching_booking(room_id, target)
        except ValueError as e:
            return api_error(str(e), _error_status(e))

        return api_success(data={'room_id': room_id, 'date': str(target), 'booking': booking})

    @bp.route('/rooms/<int:room_id>/day', methods=['GET'])
    @login_required
    @permission_required('calendar')
    def room_day(room_id):
        """
        Resolution detail for a room on a date: status, its source and the
        override or booking behind it.
        """
        target = request.args.get('date') or get_today()
        try:
            detail = get_room_day(room_id, target)
        except ValueError as e:
            return api_error(str(e), _error_status(e))

        warning = None
        ambiguous = detail.get('ambiguous')
        if ambiguous is not None:
            warning = MESSAGES['ambiguous_booking_match'].format(
                count=len(ambiguous.booking_ids),
                room_number=ambiguous.room_number,
                date=ambiguous.date
            )
            detail['ambiguous'] = ambiguous.to_dict()

        return api_success(data=detail, warning=warning)

    @bp.route('/calendar', methods=['GET'])
    @login_required
    @permission_required('calendar')
    def calendar():
        """
        Calendar grid of effective statuses.

        Query params:
            start, end: Explicit range (YYYY-MM-DD)
            date, view: Anchor date and 'week' or 'month' (used when no range)
            room_type: Filter rooms by type
            search: Filter rooms by number
        """
        room_type = request.args.get('room_type') or None
        search = request.args.get('search') or None
        start = request.args.get('start')
        end = request.args.get('end')

        try:
            if start or end:
                data = get_calendar(start, end or start, room_type=room_type, search=search)
            else:
                anchor = request.args.get('date') or get_today()
                view = request.args.get('view', 'week')
                data = get_calendar_view(anchor, view, room_type=room_type, search=search)
        except ValueError as e:
            return api_error(str(e))

        return api_success(data=data)

    @bp.route('/occupancy', methods=['GET'])
    @login_required
    @permission_required('calendar')
    def occupancy():
        target = request.args.get('date') or get_today()
        try:
            rate = get_occupancy_rate(target)
        except ValueError as e:
            return api_error(str(e))
        return api_success(data={'date': str(target), 'occupancy_rate': rate})

    # ============================================================================
    # OVERRIDES
    # ============================================================================

    @bp.route('/rooms/<int:room_id>/overrides/<date_str>', methods=['PUT'])
    @login_required
    @permission_required('calendar')
    def put_override(room_id, date_str):
        """
        Set the status of a room for one date. Replaces any earlier override.

        Request body:
            status: available, occupied, maintenance or blocked
            notes: Optional notes
        """
        data = get_json_payload()
        try:
            result = set_override(
                room_id,
                date_str,
                data.get('status'),
                notes=data.get('notes'),
                updated_by=current_user.username
            )
        except ValueError as e:
            return api_error(str(e), _error_status(e))

        return api_success(
            data=result,
            message=MESSAGES['room_status_updated'],
            warning=_conflict_warning(result['conflicting_bookings'])
        )

    @bp.route('/rooms/<int:room_id>/overrides', methods=['POST'])
    @login_required
    @permission_required('calendar')
    def post_override_range(room_id):
        """
        Set the status of a room for a date range.

        Request body:
            start_date: YYYY-MM-DD
            end_date: YYYY-MM-DD (default: start_date)
            status: available, occupied, maintenance or blocked
            notes: Optional notes
        """
        data = get_json_payload()
        start = data.get('start_date')
        if not start:
            return api_error('start_date is required')

        try:
            result = set_override_range(
                room_id,
                start,
                data.get('end_date') or start,
                data.get('status'),
                notes=data.get('notes'),
                updated_by=current_user.username
            )
        except ValueError as e:
            return api_error(str(e), _error_status(e))

        logger.info(
            "Room %s set to %s for %d day(s) by %s",
            room_id, data.get('status'), len(result['dates']), current_user.username
        )
        return api_success(
            data=result,
            message=MESSAGES['room_status_updated'],
            warning=_conflict_warning(result['conflicting_bookings'])
        )

    @bp.route('/rooms/<int:room_id>/overrides/<date_str>', methods=['DELETE'])
    @login_required
    @permission_required('calendar')
    def delete_override_route(room_id, date_str):
        """Remove the override so the status is inferred from bookings again."""
        try:
            removed = clear_override(room_id, date_str)
        except ValueError as e:
            return api_error(str(e))

        if not removed:
            return api_error('No status override for this date', 404)
        return api_success(message=MESSAGES['room_status_cleared'])
