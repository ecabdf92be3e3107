"""
Staff API routes.
Staff records and payroll summary.
"""

from flask import request
from flask_login import login_required

from models.staff import (
    get_all_staff,
    get_staff_by_id,
    create_staff,
    update_staff,
    delete_staff,
    get_payroll_summary,
)
from utils.api_response import api_success, api_error, api_not_found, get_json_payload
from utils.decorators import permission_required
from utils.messages import MESSAGES


def register_routes(bp):
    """Register staff routes on the blueprint."""

    @bp.route('/staff', methods=['GET'])
    @login_required
    @permission_required('staff')
    def list_staff():
        """
        List staff members.

        Query params:
            position, status, search
        """
        staff = get_all_staff(
            position=request.args.get('position') or None,
            status=request.args.get('status') or None,
            search=request.args.get('search') or None
        )
        return api_success(data={'staff': staff, 'count': len(staff)})

    @bp.route('/staff/payroll', methods=['GET'])
    @login_required
    @permission_required('staff')
    def payroll():
        return api_success(data=get_payroll_summary())

    @bp.route('/staff/<int:staff_id>', methods=['GET'])
    @login_required
    @permission_required('staff')
    def get_staff(staff_id):
        member = get_staff_by_id(staff_id)
        if not member:
            return api_not_found('Staff member')
        return api_success(data={'staff': member})

    @bp.route('/staff', methods=['POST'])
    @login_required
    @permission_required('staff')
    def create_staff_route():
        try:
            staff_id = create_staff(**get_json_payload())
        except ValueError as e:
            return api_error(str(e))

        return api_success(
            data={'staff': get_staff_by_id(staff_id)},
            message=MESSAGES['staff_created'],
            status=201
        )

    @bp.route('/staff/<int:staff_id>', methods=['PATCH'])
    @login_required
    @permission_required('staff')
    def update_staff_route(staff_id):
        if not get_staff_by_id(staff_id):
            return api_not_found('Staff member')

        try:
            updated = update_staff(staff_id, **get_json_payload())
        except ValueError as e:
            return api_error(str(e))

        if not updated:
            return api_error('No editable fields')

        return api_success(data={'staff': get_staff_by_id(staff_id)}, message=MESSAGES['staff_updated'])

    @bp.route('/staff/<int:staff_id>', methods=['DELETE'])
    @login_required
    @permission_required('staff')
    def delete_staff_route(staff_id):
        if not delete_staff(staff_id):
            return api_not_found('Staff member')
        return api_success(message=MESSAGES['staff_deleted'])
