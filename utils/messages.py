"""
Centralized user-facing API messages.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Welcome back, {name}!',
    'logout_success': 'Logged out successfully',
    'room_created': 'Room added successfully',
    'room_updated': 'Room updated successfully',
    'room_deactivated': 'Room deactivated',
    'room_status_updated': 'Room status updated',
    'room_status_cleared': 'Room status override removed',
    'booking_created': 'Booking created successfully',
    'booking_updated': 'Booking updated successfully',
    'booking_status_updated': 'Booking status updated to {status}',
    'customer_created': 'Customer added successfully',
    'customer_updated': 'Customer updated successfully',
    'customer_deleted': 'Customer deleted',
    'staff_created': 'Staff member added successfully',
    'staff_updated': 'Staff member updated successfully',
    'staff_deleted': 'Staff member removed',
    'inventory_created': 'Item added successfully',
    'inventory_updated': 'Item updated successfully',
    'inventory_deleted': 'Item deleted',
    'transaction_created': 'Transaction recorded',
    'transaction_updated': 'Transaction updated',
    'transaction_deleted': 'Transaction deleted',

    # Error messages
    'invalid_credentials': 'Invalid credentials. Please try again.',
    'account_inactive': 'Your account has been deactivated.',
    'login_required': 'Please log in to access this resource',
    'permission_denied': 'You do not have permission for this action',
    'internal_error': 'An unexpected error occurred',
    'not_found': 'Resource not found',
    'bad_request': 'Invalid request',

    # Warning messages
    'override_conflicts_booking': 'Room has active bookings on {dates}; the manual status takes precedence',
    'ambiguous_booking_match': '{count} bookings match {room_number} on {date}',
}
