"""
Report API routes.
Daily ledger, financial summary, profit and loss, dashboard overview.
"""

import logging
from datetime import timedelta
from flask import request
from flask_login import login_required

from models.reports import (
    get_daily_report,
    get_financial_summary,
    get_profit_loss,
    get_dashboard_overview,
)
from utils.api_response import api_success, api_error
from utils.datetime_helpers import get_today
from utils.decorators import permission_required
from utils.messages import MESSAGES

logger = logging.getLogger(__name__)


def _period_args():
    """start/end query params, defaulting to the last 30 days."""
    today = get_today()
    start = request.args.get('start') or (today - timedelta(days=29)).isoformat()
    end = request.args.get('end') or today.isoformat()
    return start, end


def register_routes(bp):
    """Register report routes on the blueprint."""

    @bp.route('/reports/daily', methods=['GET'])
    @login_required
    @permission_required('reports')
    def daily_report():
        target = request.args.get('date') or get_today().isoformat()
        try:
            report = get_daily_report(target)
        except ValueError as e:
            return api_error(str(e))
        return api_success(data=report)

    @bp.route('/reports/summary', methods=['GET'])
    @login_required
    @permission_required('reports')
    def financial_summary():
        """
        Financial summary over a period.

        Query params:
            start, end: YYYY-MM-DD (default: last 30 days)
        """
        start, end = _period_args()
        try:
            summary = get_financial_summary(start, end)
        except ValueError as e:
            return api_error(str(e))
        return api_success(data=summary)

    @bp.route('/reports/profit-loss', methods=['GET'])
    @login_required
    @permission_required('reports')
    def profit_loss():
        start, end = _period_args()
        try:
            statement = get_profit_loss(start, end)
        except ValueError as e:
            return api_error(str(e))
        return api_success(data=statement)

    @bp.route('/dashboard', methods=['GET'])
    @login_required
    @permission_required('reports')
    def dashboard():
        target = request.args.get('date') or get_today().isoformat()
        try:
            overview = get_dashboard_overview(target)
        except ValueError as e:
            return api_error(str(e))
        except Exception as e:
            logger.error("Error building dashboard: %s", e, exc_info=True)
            return api_error(MESSAGES['internal_error'], 500)
        return api_success(data=overview)
