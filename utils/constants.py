"""
Shared vocabularies for rooms, bookings, staff, inventory and the ledger.
"""

ROOM_TYPES = [
    'Standard Room',
    'Deluxe Room',
    'Suite',
    'Family Room',
    'Pool View Room'
]

# Default room pricing by type (INR per night)
DEFAULT_ROOM_PRICES = {
    'Standard Room': 2500,
    'Deluxe Room': 3500,
    'Suite': 5000,
    'Family Room': 4000,
    'Pool View Room': 3000
}

# Default room capacity by type
DEFAULT_ROOM_CAPACITY = {
    'Standard Room': 2,
    'Deluxe Room': 3,
    'Suite': 4,
    'Family Room': 6,
    'Pool View Room': 2
}

AMENITIES = [
    'AC', 'TV', 'WiFi', 'Mini Fridge', 'Balcony', 'Pool View', 'Extra Beds',
    'Parking', 'Room Service', 'Kitchenette', 'Bathtub', 'Safe'
]

# =============================================================================
# STATUSES
# =============================================================================

BOOKING_STATUSES = ['confirmed', 'checked_in', 'checked_out', 'cancelled']

# Bookings in these states occupy their room type's dates
OCCUPYING_BOOKING_STATUSES = ('confirmed', 'checked_in')

TERMINAL_BOOKING_STATUSES = ('checked_out', 'cancelled')

ROOM_AVAILABILITY_STATUSES = ['available', 'occupied', 'maintenance', 'blocked']

STAFF_STATUSES = ['active', 'inactive']

TRANSACTION_TYPES = ['income', 'expense']

# =============================================================================
# LEDGER, STAFF, INVENTORY
# =============================================================================

INCOME_SOURCES = ['Rooms', 'Restaurant', 'Pool', 'Café']

EXPENSE_CATEGORIES = [
    'Groceries', 'Staff Salary', 'Purchases', 'Electricity', 'Maintenance',
    'Marketing', 'Transportation', 'Miscellaneous'
]

STAFF_POSITIONS = [
    'Manager', 'Receptionist', 'Chef', 'Waiter/Waitress', 'Housekeeper',
    'Maintenance', 'Security Guard', 'Pool Attendant', 'Kitchen Helper', 'Other'
]

INVENTORY_CATEGORIES = [
    'Food & Beverages', 'Cleaning Supplies', 'Linens & Towels', 'Kitchen Equipment',
    'Room Amenities', 'Maintenance Supplies', 'Office Supplies', 'Pool Chemicals',
    'Furniture', 'Electronics', 'Safety Equipment', 'Other'
]

INVENTORY_UNITS = [
    'pieces', 'kg', 'liters', 'packets', 'boxes', 'bottles', 'rolls', 'sets',
    'meters', 'grams', 'ml', 'dozen', 'pairs', 'units'
]
