"""Income and expense report aggregation."""
from typing import Any

from flask import current_app

from models.transaction import get_transactions
from utils.constants import INCOME_SOURCES, EXPENSE_CATEGORIES
from utils.datetime_helpers import parse_date, parse_date_range, iter_dates, InvalidDateError


def _round(value: float) -> float:
    return round(value, 2)


def _report_window(start, end) -> tuple:
    start_date, end_date = parse_date_range(start, end)
    max_days = current_app.config.get('REPORT_MAX_DAYS', 366)
    if (end_date - start_date).days + 1 > max_days:
        raise InvalidDateError(f"Report period cannot exceed {max_days} days")
    return start_date, end_date


def summarize_transactions(transactions: list[dict[str, Any]]) -> dict[str, Any]:
    """
    Totals and breakdowns for a list of transactions.

    Args:
        transactions: Transaction dicts (type, amount, source, category)

    Returns:
        Dict with income, expenses, net_profit, profit_margin (percent of
        income, 0 when there is no income), by_source and by_category
    """
    income = 0.0
    expenses = 0.0
    by_source = {}
    by_category = {}

    for tx in transactions:
        amount = float(tx['amount'])
        if tx['type'] == 'income':
            income += amount
            source = tx.get('source') or 'Other'
            by_source[source] = by_source.get(source, 0.0) + amount
        else:
            expenses += amount
            category = tx.get('category') or 'Miscellaneous'
            by_category[category] = by_category.get(category, 0.0) + amount

    net_profit = income - expenses
    profit_margin = (net_profit / income) * 100 if income > 0 else 0.0

    return {
        'income': _round(income),
        'expenses': _round(expenses),
        'net_profit': _round(net_profit),
        'profit_margin': round(profit_margin, 1),
        'transaction_count': len(transactions),
        'by_source': {k: _round(v) for k, v in by_source.items()},
        'by_category': {k: _round(v) for k, v in by_category.items()},
    }


def daily_series(transactions: list[dict[str, Any]], start, end) -> list[dict[str, Any]]:
    """
    Per-day income, expenses and profit for every date in [start, end].

    Days without transactions are included with zero totals.
    """
    start_date, end_date = parse_date_range(start, end)
    days = {
        day.isoformat(): {'date': day.isoformat(), 'income': 0.0, 'expenses': 0.0}
        for day in iter_dates(start_date, end_date)
    }

    for tx in transactions:
        entry = days.get(parse_date(tx['date']).isoformat())
        if entry is None:
            continue
        key = 'income' if tx['type'] == 'income' else 'expenses'
        entry[key] += float(tx['amount'])

    series = []
    for entry in days.values():
        series.append({
            'date': entry['date'],
            'income': _round(entry['income']),
            'expenses': _round(entry['expenses']),
            'profit': _round(entry['income'] - entry['expenses']),
        })
    return series


def get_daily_report(target_date: str) -> dict[str, Any]:
    """
    Ledger report for a single date.

    Args:
        target_date: Date string in YYYY-MM-DD format

    Returns:
        Summary dict plus the day's transactions
    """
    day = parse_date(target_date).isoformat()
    transactions = get_transactions(date_from=day, date_to=day)
    report = summarize_transactions(transactions)
    report['date'] = day
    report['transactions'] = transactions
    return report


def get_financial_summary(start: str, end: str) -> dict[str, Any]:
    """
    Financial summary over a period.

    Growth rate compares income of the second half of the period with the
    first half (0 when the first half has no income).

    Returns:
        Summary dict with daily series, average daily revenue and growth rate
    """
    start_date, end_date = _report_window(start, end)
    transactions = get_transactions(date_from=start_date, date_to=end_date)

    summary = summarize_transactions(transactions)
    series = daily_series(transactions, start_date, end_date)

    midpoint = len(series) // 2
    first_half = sum(day['income'] for day in series[:midpoint])
    second_half = sum(day['income'] for day in series[midpoint:])
    growth_rate = ((second_half - first_half) / first_half) * 100 if first_half > 0 else 0.0

    summary.update({
        'start': start_date.isoformat(),
        'end': end_date.isoformat(),
        'daily': series,
        'average_daily_revenue': _round(summary['income'] / len(series)),
        'growth_rate': round(growth_rate, 1),
    })
    return summary


def get_profit_loss(start: str, end: str) -> dict[str, Any]:
    """
    Profit and loss statement over a period.

    Every known income source and expense category is listed, zero if unused.
    """
    start_date, end_date = _report_window(start, end)
    summary = summarize_transactions(get_transactions(date_from=start_date, date_to=end_date))

    revenue = {source: summary['by_source'].get(source, 0.0) for source in INCOME_SOURCES}
    revenue.update({k: v for k, v in summary['by_source'].items() if k not in revenue})
    expenses = {category: summary['by_category'].get(category, 0.0) for category in EXPENSE_CATEGORIES}
    expenses.update({k: v for k, v in summary['by_category'].items() if k not in expenses})

    return {
        'start': start_date.isoformat(),
        'end': end_date.isoformat(),
        'revenue': {'total': summary['income'], 'by_source': revenue},
        'expenses': {'total': summary['expenses'], 'by_category': expenses},
        'gross_profit': summary['net_profit'],
        'net_profit': summary['net_profit'],
        'profit_margin': summary['profit_margin'],
    }
