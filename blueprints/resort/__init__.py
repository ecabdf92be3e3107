"""
Resort blueprint initialization.
Assembles the JSON API route modules into the main resort blueprint:
- routes/rooms.py - Room CRUD
- routes/calendar.py - Effective status, calendar grid, status overrides
- routes/bookings.py - Booking CRUD and status transitions
- routes/customers.py - Customer CRUD
- routes/staff.py - Staff CRUD and payroll
- routes/inventory.py - Inventory CRUD and stock
- routes/transactions.py - Income/expense ledger
- routes/reports.py - Financial reports and dashboard
"""

from flask import Blueprint

resort_bp = Blueprint('resort', __name__)

from blueprints.resort.routes import (  # noqa: E402
    rooms,
    calendar,
    bookings,
    customers,
    staff,
    inventory,
    transactions,
    reports,
)

rooms.register_routes(resort_bp)
calendar.register_routes(resort_bp)
bookings.register_routes(resort_bp)
customers.register_routes(resort_bp)
staff.register_routes(resort_bp)
inventory.register_routes(resort_bp)
transactions.register_routes(resort_bp)
reports.register_routes(resort_bp)
