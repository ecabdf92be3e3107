"""Dashboard overview figures."""
from datetime import timedelta
from typing import Any

from models.booking import get_arrivals, get_departures
from models.inventory import get_inventory_summary
from models.reports.financial import summarize_transactions
from models.room_calendar import get_occupancy_rate
from models.staff import get_payroll_summary
from models.transaction import get_transactions
from utils.datetime_helpers import parse_date


def get_dashboard_overview(target_date: str) -> dict[str, Any]:
    """
    Overview for the dashboard landing page.

    Profit trend is today's profit against yesterday's, in percent
    (0 when yesterday's profit is not positive).

    Args:
        target_date: The dashboard's "today" (YYYY-MM-DD)

    Returns:
        Dict with today, month, profit_trend, occupancy_rate, arrivals,
        departures, low_stock_count and active_staff
    """
    today = parse_date(target_date)
    yesterday = today - timedelta(days=1)
    month_start = today.replace(day=1)

    today_summary = summarize_transactions(get_transactions(date_from=today, date_to=today))
    yesterday_summary = summarize_transactions(get_transactions(date_from=yesterday, date_to=yesterday))
    month_summary = summarize_transactions(get_transactions(date_from=month_start, date_to=today))

    yesterday_profit = yesterday_summary['net_profit']
    profit_trend = 0.0
    if yesterday_profit > 0:
        profit_trend = (today_summary['net_profit'] - yesterday_profit) / yesterday_profit * 100

    return {
        'date': today.isoformat(),
        'today': {
            'income': today_summary['income'],
            'expenses': today_summary['expenses'],
            'profit': today_summary['net_profit'],
        },
        'month': {
            'income': month_summary['income'],
            'expenses': month_summary['expenses'],
            'profit': month_summary['net_profit'],
            'by_source': month_summary['by_source'],
            'by_category': month_summary['by_category'],
        },
        'profit_trend': round(profit_trend, 1),
        'occupancy_rate': get_occupancy_rate(today),
        'arrivals': len(get_arrivals(today)),
        'departures': len(get_departures(today)),
        'low_stock_count': get_inventory_summary()['low_stock_count'],
        'active_staff': get_payroll_summary()['active_count'],
    }
