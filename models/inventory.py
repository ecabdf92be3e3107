"""
Inventory model.
CRUD operations, stock adjustments and low-stock queries.
"""

from typing import Optional

from database import get_db
from utils.constants import INVENTORY_CATEGORIES, INVENTORY_UNITS
from utils.validators import require_text, sanitize_input, parse_amount, parse_count


def _clean_item_fields(fields: dict, partial: bool = False) -> dict:
    values = {}

    if 'name' in fields or not partial:
        values['name'] = require_text(fields.get('name'), 'Name')

    if 'category' in fields or not partial:
        category = sanitize_input(fields.get('category'))
        if category not in INVENTORY_CATEGORIES:
            raise ValueError(f"Invalid category: {category or '(empty)'}")
        values['category'] = category

    if 'unit' in fields or not partial:
        unit = sanitize_input(fields.get('unit'))
        if unit not in INVENTORY_UNITS:
            raise ValueError(f"Invalid unit: {unit or '(empty)'}")
        values['unit'] = unit

    if 'quantity' in fields or not partial:
        values['quantity'] = parse_count(fields.get('quantity'), 'Quantity')

    if 'min_quantity' in fields:
        values['min_quantity'] = parse_count(fields.get('min_quantity'), 'Minimum quantity')

    if 'unit_price' in fields:
        values['unit_price'] = parse_amount(fields.get('unit_price'), 'Unit price')

    for field in ('supplier', 'notes'):
        if field in fields:
            values[field] = sanitize_input(fields.get(field), 500) or None

    return values


def create_item(**fields) -> int:
    """
    Create an inventory item.

    Args:
        **fields: name, category, unit, quantity (required); min_quantity,
                  unit_price, supplier, notes

    Returns:
        int: Item ID
    """
    values = _clean_item_fields(fields)
    columns = ', '.join(values)
    placeholders = ', '.join('?' * len(values))

    db = get_db()
    cursor = db.execute(
        f'INSERT INTO inventory ({columns}) VALUES ({placeholders})', list(values.values())
    )
    db.commit()
    return cursor.lastrowid


def get_item_by_id(item_id: int) -> Optional[dict]:
    db = get_db()
    row = db.execute('SELECT * FROM inventory WHERE id = ?', (item_id,)).fetchone()
    return _with_flags(dict(row)) if row else None


def get_all_items(category: str = None, search: str = None, low_stock_only: bool = False) -> list:
    """
    List inventory items ordered by name.

    Args:
        category: Filter by category
        search: Match on name or supplier
        low_stock_only: Only items at or below their minimum quantity

    Returns:
        list: Item dicts with low_stock and stock_value
    """
    query = 'SELECT * FROM inventory WHERE 1=1'
    params = []

    if category:
        query += ' AND category = ?'
        params.append(category)

    if search:
        query += ' AND (name LIKE ? OR supplier LIKE ?)'
        params.extend([f'%{search}%', f'%{search}%'])

    if low_stock_only:
        query += ' AND quantity <= min_quantity'

    query += ' ORDER BY name'

    db = get_db()
    return [_with_flags(dict(row)) for row in db.execute(query, params).fetchall()]


def update_item(item_id: int, **fields) -> bool:
    values = _clean_item_fields(fields, partial=True)
    if not values:
        return False

    updates = [f'{field} = ?' for field in values]
    params = list(values.values()) + [item_id]

    db = get_db()
    cursor = db.execute(f'''
        UPDATE inventory
        SET {', '.join(updates)}, last_updated = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', params)
    db.commit()
    return cursor.rowcount > 0


def adjust_stock(item_id: int, delta: int) -> Optional[dict]:
    """
    Add to or remove from an item's quantity.

    Args:
        item_id: Item ID
        delta: Signed quantity change

    Returns:
        dict or None: Updated item, None if missing

    Raises:
        ValueError: If the result would be negative
    """
    item = get_item_by_id(item_id)
    if not item:
        return None

    delta = int(delta)
    new_quantity = item['quantity'] + delta
    if new_quantity < 0:
        raise ValueError(f"Only {item['quantity']} {item['unit']} in stock")

    db = get_db()
    db.execute('''
        UPDATE inventory
        SET quantity = ?, last_updated = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (new_quantity, item_id))
    db.commit()
    return get_item_by_id(item_id)


def delete_item(item_id: int) -> bool:
    db = get_db()
    cursor = db.execute('DELETE FROM inventory WHERE id = ?', (item_id,))
    db.commit()
    return cursor.rowcount > 0


def get_inventory_summary() -> dict:
    """
    Totals across the inventory.

    Returns:
        dict: {'item_count', 'low_stock_count', 'total_value'}
    """
    db = get_db()
    row = db.execute('''
        SELECT COUNT(*) as item_count,
               COALESCE(SUM(CASE WHEN quantity <= min_quantity THEN 1 ELSE 0 END), 0) as low_stock_count,
               COALESCE(SUM(quantity * unit_price), 0) as total_value
        FROM inventory
    ''').fetchone()
    summary = dict(row)
    summary['total_value'] = round(summary['total_value'], 2)
    return summary


def _with_flags(item: dict) -> dict:
    item['low_stock'] = item['quantity'] <= item['min_quantity']
    item['stock_value'] = round(item['quantity'] * item['unit_price'], 2)
    return item
