"""
Transaction API routes.
Income and expense ledger.
"""

from flask import request
from flask_login import login_required

from models.transaction import (
    get_transactions,
    get_transaction_by_id,
    create_transaction,
    update_transaction,
    delete_transaction,
)
from utils.api_response import api_success, api_error, api_not_found, get_json_payload
from utils.decorators import permission_required
from utils.messages import MESSAGES


def register_routes(bp):
    """Register transaction routes on the blueprint."""

    @bp.route('/transactions', methods=['GET'])
    @login_required
    @permission_required('transactions')
    def list_transactions():
        """
        List transactions.

        Query params:
            type: income or expense
            date_from, date_to: Inclusive date range
            source, category, search
        """
        try:
            transactions = get_transactions(
                tx_type=request.args.get('type') or None,
                date_from=request.args.get('date_from') or None,
                date_to=request.args.get('date_to') or None,
                source=request.args.get('source') or None,
                category=request.args.get('category') or None,
                search=request.args.get('search') or None
            )
        except ValueError as e:
            return api_error(str(e))

        return api_success(data={'transactions': transactions, 'count': len(transactions)})

    @bp.route('/transactions/<int:transaction_id>', methods=['GET'])
    @login_required
    @permission_required('transactions')
    def get_transaction(transaction_id):
        transaction = get_transaction_by_id(transaction_id)
        if not transaction:
            return api_not_found('Transaction')
        return api_success(data={'transaction': transaction})

    @bp.route('/transactions', methods=['POST'])
    @login_required
    @permission_required('transactions')
    def create_transaction_route():
        """
        Record a transaction.

        Request body:
            type: income or expense
            amount: Positive amount
            source: Income source (income only)
            category: Expense category (expense only)
            date: YYYY-MM-DD (default: today)
            note: Optional note
        """
        try:
            transaction_id = create_transaction(**get_json_payload())
        except ValueError as e:
            return api_error(str(e))

        return api_success(
            data={'transaction': get_transaction_by_id(transaction_id)},
            message=MESSAGES['transaction_created'],
            status=201
        )

    @bp.route('/transactions/<int:transaction_id>', methods=['PATCH'])
    @login_required
    @permission_required('transactions')
    def update_transaction_route(transaction_id):
        if not get_transaction_by_id(transaction_id):
            return api_not_found('Transaction')

        try:
            update_transaction(transaction_id, **get_json_payload())
        except ValueError as e:
            return api_error(str(e))

        return api_success(
            data={'transaction': get_transaction_by_id(transaction_id)},
            message=MESSAGES['transaction_updated']
        )

    @bp.route('/transactions/<int:transaction_id>', methods=['DELETE'])
    @login_required
    @permission_required('transactions')
    def delete_transaction_route(transaction_id):
        if not delete_transaction(transaction_id):
            return api_not_found('Transaction')
        return api_success(message=MESSAGES['transaction_deleted'])
