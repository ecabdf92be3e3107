"""
Transaction ledger model.
Income and expense records with filtering.
"""

from typing import Optional

from database import get_db
from utils.constants import TRANSACTION_TYPES, INCOME_SOURCES, EXPENSE_CATEGORIES
from utils.datetime_helpers import parse_date, get_today
from utils.validators import parse_amount, sanitize_input


def _clean_transaction_fields(fields: dict, current: dict = None) -> dict:
    """
    Validate transaction fields, merging over an existing record when given.

    Income rows carry a source and no category; expense rows the reverse.
    """
    merged = dict(current or {})
    merged.update(fields)

    tx_type = merged.get('type')
    if tx_type not in TRANSACTION_TYPES:
        raise ValueError(f"Invalid transaction type: {tx_type}")

    values = {
        'type': tx_type,
        'amount': parse_amount(merged.get('amount'), 'Amount', allow_zero=False),
        'date': parse_date(merged['date']).isoformat() if merged.get('date') else None,
        'note': sanitize_input(merged.get('note'), 500) or None,
    }

    if tx_type == 'income':
        if merged.get('source') not in INCOME_SOURCES:
            raise ValueError(f"Invalid income source: {merged.get('source')}")
        values['source'] = merged['source']
        values['category'] = None
    else:
        if merged.get('category') not in EXPENSE_CATEGORIES:
            raise ValueError(f"Invalid expense category: {merged.get('category')}")
        values['category'] = merged['category']
        values['source'] = None

    return values


def create_transaction(**fields) -> int:
    """
    Record an income or expense.

    Args:
        **fields: type, amount, source (income) or category (expense),
                  date (defaults to today), note

    Returns:
        int: Transaction ID
    """
    values = _clean_transaction_fields(fields)
    if values['date'] is None:
        values['date'] = get_today().isoformat()

    columns = ', '.join(values)
    placeholders = ', '.join('?' * len(values))

    db = get_db()
    cursor = db.execute(
        f'INSERT INTO transactions ({columns}) VALUES ({placeholders})', list(values.values())
    )
    db.commit()
    return cursor.lastrowid


def get_transaction_by_id(transaction_id: int) -> Optional[dict]:
    db = get_db()
    row = db.execute('SELECT * FROM transactions WHERE id = ?', (transaction_id,)).fetchone()
    return dict(row) if row else None


def get_transactions(
    tx_type: str = None,
    date_from: str = None,
    date_to: str = None,
    source: str = None,
    category: str = None,
    search: str = None
) -> list:
    """
    List transactions, newest first.

    Args:
        tx_type: income or expense
        date_from: Inclusive start date
        date_to: Inclusive end date
        source: Income source
        category: Expense category
        search: Match on note, source or category

    Returns:
        list: Transaction dicts
    """
    query = 'SELECT * FROM transactions WHERE 1=1'
    params = []

    if tx_type:
        query += ' AND type = ?'
        params.append(tx_type)

    if date_from:
        query += ' AND date >= ?'
        params.append(parse_date(date_from).isoformat())

    if date_to:
        query += ' AND date <= ?'
        params.append(parse_date(date_to).isoformat())

    if source:
        query += ' AND source = ?'
        params.append(source)

    if category:
        query += ' AND category = ?'
        params.append(category)

    if search:
        query += ' AND (note LIKE ? OR source LIKE ? OR category LIKE ?)'
        pattern = f'%{search}%'
        params.extend([pattern, pattern, pattern])

    query += ' ORDER BY date DESC, id DESC'

    db = get_db()
    return [dict(row) for row in db.execute(query, params).fetchall()]


def update_transaction(transaction_id: int, **fields) -> bool:
    current = get_transaction_by_id(transaction_id)
    if not current:
        return False

    values = _clean_transaction_fields(fields, current=current)
    if values['date'] is None:
        values['date'] = current['date']

    updates = [f'{field} = ?' for field in values]
    params = list(values.values()) + [transaction_id]

    db = get_db()
    db.execute(f'''
        UPDATE transactions
        SET {', '.join(updates)}, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', params)
    db.commit()
    return True


def delete_transaction(transaction_id: int) -> bool:
    db = get_db()
    cursor = db.execute('DELETE FROM transactions WHERE id = ?', (transaction_id,))
    db.commit()
    return cursor.rowcount > 0
