"""
Booking API routes.
Endpoints for booking CRUD, status transitions and front desk lists.
"""

import logging
from flask import request
from flask_login import login_required, current_user

from models.booking import (
    get_all_bookings,
    get_booking_by_id,
    create_booking,
    validate_booking_fields,
    update_booking,
    get_arrivals,
    get_departures,
)
from models.booking_state import (
    change_booking_status,
    get_status_history,
    get_valid_transitions,
    InvalidTransitionError,
)
from models.customer import create_customer
from utils.api_response import api_success, api_error, api_not_found, get_json_payload
from utils.datetime_helpers import get_today
from utils.decorators import permission_required
from utils.messages import MESSAGES
from utils.permissions import permits

logger = logging.getLogger(__name__)


def _booking_detail(booking: dict) -> dict:
    booking['history'] = get_status_history(booking['id'])
    booking['allowed_transitions'] = list(get_valid_transitions(booking['status']))
    return booking


def register_routes(bp):
    """Register booking routes on the blueprint."""

    @bp.route('/bookings', methods=['GET'])
    @login_required
    @permission_required('bookings')
    def list_bookings():
        """
        List bookings.

        Query params:
            status, customer_id, search, date_from, date_to
        """
        try:
            bookings = get_all_bookings(
                status=request.args.get('status') or None,
                customer_id=request.args.get('customer_id', type=int),
                search=request.args.get('search') or None,
                date_from=request.args.get('date_from') or None,
                date_to=request.args.get('date_to') or None
            )
        except ValueError as e:
            return api_error(str(e))

        return api_success(data={'bookings': bookings, 'count': len(bookings)})

    @bp.route('/bookings/<int:booking_id>', methods=['GET'])
    @login_required
    @permission_required('bookings')
    def get_booking(booking_id):
        booking = get_booking_by_id(booking_id)
        if not booking:
            return api_not_found('Booking')
        return api_success(data={'booking': _booking_detail(booking)})

    @bp.route('/bookings', methods=['POST'])
    @login_required
    @permission_required('bookings')
    def create_booking_route():
        """
        Create a booking.

        Request body:
            customer_id: Existing customer, or
            customer: {name, phone, email, address} to create one inline
            check_in, check_out, room_type, guests, total_amount,
            advance_paid, special_requests
        """
        data = get_json_payload()
        fields = {k: v for k, v in data.items() if k not in ('customer_id', 'customer')}

        try:
            validate_booking_fields(fields)
            customer_id = data.get('customer_id')
            new_customer = data.get('customer')
            if not customer_id and isinstance(new_customer, dict):
                customer_id = create_customer(
                    name=new_customer.get('name'),
                    phone=new_customer.get('phone'),
                    email=new_customer.get('email'),
                    address=new_customer.get('address')
                )
            if not customer_id:
                return api_error('customer_id or customer is required')

            booking_id = create_booking(customer_id, **fields)
        except ValueError as e:
            return api_error(str(e))
        except Exception as e:
            logger.error("Error creating booking: %s", e, exc_info=True)
            return api_error(MESSAGES['internal_error'], 500)

        logger.info("Booking %s created by %s", booking_id, current_user.username)
        return api_success(
            data={'booking': get_booking_by_id(booking_id)},
            message=MESSAGES['booking_created'],
            status=201
        )

    @bp.route('/bookings/<int:booking_id>', methods=['PATCH'])
    @login_required
    @permission_required('bookings')
    def update_booking_route(booking_id):
        """Update booking dates, room type, guests, amounts or requests."""
        if not get_booking_by_id(booking_id):
            return api_not_found('Booking')

        try:
            updated = update_booking(booking_id, **get_json_payload())
        except ValueError as e:
            return api_error(str(e))

        if not updated:
            return api_error('No editable fields')

        return api_success(
            data={'booking': get_booking_by_id(booking_id)},
            message=MESSAGES['booking_updated']
        )

    @bp.route('/bookings/<int:booking_id>/status', methods=['POST'])
    @login_required
    @permission_required('bookings')
    def change_status(booking_id):
        """
        Change booking status.

        Request body:
            status: checked_in, checked_out or cancelled
            notes: Optional notes
            force: Skip the check-in date window (admin only)
        """
        data = get_json_payload()
        to_status = data.get('status')
        if not to_status:
            return api_error('status is required')

        force = bool(data.get('force'))
        if force and not permits(current_user.permissions, 'all'):
            return api_error(MESSAGES['permission_denied'], 403)

        try:
            booking = change_booking_status(
                booking_id,
                to_status,
                changed_by=current_user.username,
                notes=data.get('notes') or '',
                today=get_today(),
                enforce_window=not force
            )
        except InvalidTransitionError as e:
            return api_error(str(e), 400, transition=e.to_dict())
        except Exception as e:
            logger.error("Error changing status of booking %s: %s", booking_id, e, exc_info=True)
            return api_error(MESSAGES['internal_error'], 500)

        if booking is None:
            return api_not_found('Booking')

        return api_success(
            data={'booking': _booking_detail(booking)},
            message=MESSAGES['booking_status_updated'].format(status=to_status)
        )

    @bp.route('/bookings/arrivals', methods=['GET'])
    @login_required
    @permission_required('bookings')
    def arrivals():
        """Confirmed bookings checking in on a date (default: today)."""
        target = request.args.get('date') or get_today()
        try:
            bookings = get_arrivals(target)
        except ValueError as e:
            return api_error(str(e))
        return api_success(data={'date': str(target), 'bookings': bookings})

    @bp.route('/bookings/departures', methods=['GET'])
    @login_required
    @permission_required('bookings')
    def departures():
        """Checked-in bookings checking out on a date (default: today)."""
        target = request.args.get('date') or get_today()
        try:
            bookings = get_departures(target)
        except ValueError as e:
            return api_error(str(e))
        return api_success(data={'date': str(target), 'bookings': bookings})
