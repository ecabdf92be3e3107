"""Reports model module."""
from models.reports.financial import (
    summarize_transactions,
    daily_series,
    get_daily_report,
    get_financial_summary,
    get_profit_loss
)
from models.reports.dashboard import get_dashboard_overview

__all__ = [
    'summarize_transactions',
    'daily_series',
    'get_daily_report',
    'get_financial_summary',
    'get_profit_loss',
    'get_dashboard_overview'
]
