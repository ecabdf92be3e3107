"""
Inventory API routes.
Stock items, stock adjustments and low-stock alerts.
"""

from flask import request
from flask_login import login_required

from models.inventory import (
    get_all_items,
    get_item_by_id,
    create_item,
    update_item,
    adjust_stock,
    delete_item,
    get_inventory_summary,
)
from utils.api_response import api_success, api_error, api_not_found, get_json_payload
from utils.decorators import permission_required
from utils.messages import MESSAGES
from utils.validators import parse_count


def register_routes(bp):
    """Register inventory routes on the blueprint."""

    @bp.route('/inventory', methods=['GET'])
    @login_required
    @permission_required('inventory')
    def list_items():
        """
        List inventory items.

        Query params:
            category, search, low_stock ('true' for items at or below minimum)
        """
        items = get_all_items(
            category=request.args.get('category') or None,
            search=request.args.get('search') or None,
            low_stock_only=request.args.get('low_stock', '').lower() == 'true'
        )
        return api_success(data={'items': items, 'count': len(items)})

    @bp.route('/inventory/summary', methods=['GET'])
    @login_required
    @permission_required('inventory')
    def inventory_summary():
        return api_success(data=get_inventory_summary())

    @bp.route('/inventory/<int:item_id>', methods=['GET'])
    @login_required
    @permission_required('inventory')
    def get_item(item_id):
        item = get_item_by_id(item_id)
        if not item:
            return api_not_found('Item')
        return api_success(data={'item': item})

    @bp.route('/inventory', methods=['POST'])
    @login_required
    @permission_required('inventory')
    def create_item_route():
        try:
            item_id = create_item(**get_json_payload())
        except ValueError as e:
            return api_error(str(e))

        return api_success(
            data={'item': get_item_by_id(item_id)},
            message=MESSAGES['inventory_created'],
            status=201
        )

    @bp.route('/inventory/<int:item_id>', methods=['PATCH'])
    @login_required
    @permission_required('inventory')
    def update_item_route(item_id):
        if not get_item_by_id(item_id):
            return api_not_found('Item')

        try:
            updated = update_item(item_id, **get_json_payload())
        except ValueError as e:
            return api_error(str(e))

        if not updated:
            return api_error('No editable fields')

        return api_success(data={'item': get_item_by_id(item_id)}, message=MESSAGES['inventory_updated'])

    @bp.route('/inventory/<int:item_id>/stock', methods=['POST'])
    @login_required
    @permission_required('inventory')
    def adjust_stock_route(item_id):
        """
        Adjust stock.

        Request body:
            delta: Signed quantity change (e.g. 10 or -3)
        """
        data = get_json_payload()
        try:
            delta = parse_count(data.get('delta'), 'Delta', minimum=None)
            item = adjust_stock(item_id, delta)
        except ValueError as e:
            return api_error(str(e))

        if item is None:
            return api_not_found('Item')
        return api_success(data={'item': item}, message=MESSAGES['inventory_updated'])

    @bp.route('/inventory/<int:item_id>', methods=['DELETE'])
    @login_required
    @permission_required('inventory')
    def delete_item_route(item_id):
        if not delete_item(item_id):
            return api_not_found('Item')
        return api_success(message=MESSAGES['inventory_deleted'])
