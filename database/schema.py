"""
Database schema definitions.
Table creation, indexes, and structure management.
"""


def drop_tables(db):
    """Drop all existing tables."""
    # Disable foreign key constraints before dropping
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'booking_status_history',
        'room_availability',
        'bookings',
        'customers',
        'rooms',
        'staff',
        'inventory',
        'transactions',
        'users',
        'roles'
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    # Re-enable foreign key constraints
    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables."""

    # 1. Users & Auth Tables
    db.execute('''
        CREATE TABLE roles (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT UNIQUE NOT NULL,
            description TEXT,
            permissions TEXT NOT NULL DEFAULT '{}',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT UNIQUE NOT NULL,
            email TEXT UNIQUE,
            password_hash TEXT NOT NULL,
            full_name TEXT NOT NULL,
            role_id INTEGER NOT NULL REFERENCES roles(id),
            active INTEGER DEFAULT 1,
            last_login TIMESTAMP,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 2. Rooms & Availability
    db.execute('''
        CREATE TABLE rooms (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            room_number TEXT UNIQUE NOT NULL,
            room_type TEXT NOT NULL,
            capacity INTEGER NOT NULL DEFAULT 2 CHECK (capacity > 0),
            base_price REAL NOT NULL DEFAULT 0 CHECK (base_price >= 0),
            amenities TEXT DEFAULT '[]',
            description TEXT,
            is_active INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE room_availability (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            room_id INTEGER NOT NULL REFERENCES rooms(id) ON DELETE CASCADE,
            date TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'available'
                CHECK (status IN ('available', 'occupied', 'maintenance', 'blocked')),
            notes TEXT,
            updated_by TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(room_id, date)
        )
    ''')

    # 3. Customers & Bookings
    db.execute('''
        CREATE TABLE customers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL CHECK (trim(name) != ''),
            phone TEXT NOT NULL CHECK (trim(phone) != ''),
            email TEXT,
            address TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE bookings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            customer_id INTEGER NOT NULL REFERENCES customers(id) ON DELETE CASCADE,
            check_in TEXT NOT NULL,
            check_out TEXT NOT NULL,
            room_type TEXT NOT NULL,
            guests INTEGER NOT NULL DEFAULT 1 CHECK (guests >= 1),
            total_amount REAL NOT NULL DEFAULT 0 CHECK (total_amount >= 0),
            advance_paid REAL NOT NULL DEFAULT 0 CHECK (advance_paid >= 0),
            status TEXT NOT NULL DEFAULT 'confirmed'
                CHECK (status IN ('confirmed', 'checked_in', 'checked_out', 'cancelled')),
            special_requests TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            CHECK (check_in < check_out),
            CHECK (advance_paid <= total_amount)
        )
    ''')

    db.execute('''
        CREATE TABLE booking_status_history (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            booking_id INTEGER NOT NULL REFERENCES bookings(id) ON DELETE CASCADE,
            from_status TEXT,
            to_status TEXT NOT NULL,
            changed_by TEXT,
            notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 4. Operations: staff, inventory, ledger
    db.execute('''
        CREATE TABLE staff (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL CHECK (trim(name) != ''),
            phone TEXT NOT NULL CHECK (trim(phone) != ''),
            email TEXT,
            address TEXT,
            position TEXT NOT NULL,
            salary REAL NOT NULL CHECK (salary >= 0),
            hire_date TEXT NOT NULL DEFAULT CURRENT_DATE,
            status TEXT NOT NULL DEFAULT 'active' CHECK (status IN ('active', 'inactive')),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE inventory (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL CHECK (trim(name) != ''),
            category TEXT NOT NULL CHECK (trim(category) != ''),
            quantity INTEGER NOT NULL CHECK (quantity >= 0),
            unit TEXT NOT NULL CHECK (trim(unit) != ''),
            min_quantity INTEGER NOT NULL DEFAULT 0 CHECK (min_quantity >= 0),
            unit_price REAL NOT NULL DEFAULT 0 CHECK (unit_price >= 0),
            supplier TEXT,
            notes TEXT,
            last_updated TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE transactions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            type TEXT NOT NULL CHECK (type IN ('income', 'expense')),
            source TEXT,
            category TEXT,
            amount REAL NOT NULL CHECK (amount > 0),
            date TEXT NOT NULL DEFAULT CURRENT_DATE,
            note TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')


def create_indexes(db):
    """Create indexes for calendar and report queries."""
    indexes = [
        'CREATE INDEX IF NOT EXISTS idx_users_username ON users(username)',
        'CREATE INDEX IF NOT EXISTS idx_rooms_type ON rooms(room_type)',
        'CREATE INDEX IF NOT EXISTS idx_room_availability_date ON room_availability(date)',
        'CREATE INDEX IF NOT EXISTS idx_room_availability_room_date ON room_availability(room_id, date)',
        'CREATE INDEX IF NOT EXISTS idx_bookings_customer_id ON bookings(customer_id)',
        'CREATE INDEX IF NOT EXISTS idx_bookings_status ON bookings(status)',
        'CREATE INDEX IF NOT EXISTS idx_bookings_dates ON bookings(check_in, check_out)',
        'CREATE INDEX IF NOT EXISTS idx_bookings_type ON bookings(room_type)',
        'CREATE INDEX IF NOT EXISTS idx_booking_history_booking ON booking_status_history(booking_id)',
        'CREATE INDEX IF NOT EXISTS idx_staff_position ON staff(position)',
        'CREATE INDEX IF NOT EXISTS idx_staff_status ON staff(status)',
        'CREATE INDEX IF NOT EXISTS idx_inventory_category ON inventory(category)',
        'CREATE INDEX IF NOT EXISTS idx_inventory_name ON inventory(name)',
        'CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(date)',
        'CREATE INDEX IF NOT EXISTS idx_transactions_type ON transactions(type)',
    ]

    for statement in indexes:
        db.execute(statement)
