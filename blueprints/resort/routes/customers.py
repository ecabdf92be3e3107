"""
Customer API routes.
"""

from flask import request
from flask_login import login_required

from models.booking import get_bookings_by_customer
from models.customer import (
    get_all_customers,
    get_customer_by_id,
    create_customer,
    update_customer,
    delete_customer,
)
from utils.api_response import api_success, api_error, api_not_found, get_json_payload
from utils.decorators import permission_required
from utils.messages import MESSAGES


def register_routes(bp):
    """Register customer routes on the blueprint."""

    @bp.route('/customers', methods=['GET'])
    @login_required
    @permission_required('customers')
    def list_customers():
        customers = get_all_customers(search=request.args.get('search') or None)
        return api_success(data={'customers': customers, 'count': len(customers)})

    @bp.route('/customers/<int:customer_id>', methods=['GET'])
    @login_required
    @permission_required('customers')
    def get_customer(customer_id):
        """Customer with totals and booking history."""
        customer = get_customer_by_id(customer_id)
        if not customer:
            return api_not_found('Customer')
        customer['bookings'] = get_bookings_by_customer(customer_id)
        return api_success(data={'customer': customer})

    @bp.route('/customers', methods=['POST'])
    @login_required
    @permission_required('customers')
    def create_customer_route():
        data = get_json_payload()
        try:
            customer_id = create_customer(
                name=data.get('name'),
                phone=data.get('phone'),
                email=data.get('email'),
                address=data.get('address')
            )
        except ValueError as e:
            return api_error(str(e))

        return api_success(
            data={'customer': get_customer_by_id(customer_id)},
            message=MESSAGES['customer_created'],
            status=201
        )

    @bp.route('/customers/<int:customer_id>', methods=['PATCH'])
    @login_required
    @permission_required('customers')
    def update_customer_route(customer_id):
        if not get_customer_by_id(customer_id):
            return api_not_found('Customer')

        try:
            updated = update_customer(customer_id, **get_json_payload())
        except ValueError as e:
            return api_error(str(e))

        if not updated:
            return api_error('No editable fields')

        return api_success(
            data={'customer': get_customer_by_id(customer_id)},
            message=MESSAGES['customer_updated']
        )

    @bp.route('/customers/<int:customer_id>', methods=['DELETE'])
    @login_required
    @permission_required('customers')
    def delete_customer_route(customer_id):
        try:
            deleted = delete_customer(customer_id)
        except ValueError as e:
            return api_error(str(e), 409)

        if not deleted:
            return api_not_found('Customer')
        return api_success(message=MESSAGES['customer_deleted'])
