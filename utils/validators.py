"""
Input validation helper functions.
Provides validation for common input types.
"""

import math
import re


def validate_email(email: str) -> bool:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


def validate_phone(phone: str) -> bool:
    """
    Validate Indian mobile number format.
    Accepts: +91 XXXXX XXXXX, 91XXXXXXXXXX, XXXXX XXXXX

    Args:
        phone: Phone number to validate

    Returns:
        True if valid phone format
    """
    if not phone:
        return False

    # Remove spaces and common separators
    cleaned = re.sub(r'[\s\-\(\)]', '', phone)

    patterns = [
        r'^\+91[6-9][0-9]{9}$',  # +91XXXXXXXXXX
        r'^91[6-9][0-9]{9}$',    # 91XXXXXXXXXX
        r'^0?[6-9][0-9]{9}$'     # XXXXXXXXXX (starts with 6, 7, 8, or 9)
    ]

    return any(bool(re.match(pattern, cleaned)) for pattern in patterns)


def validate_room_number(room: str) -> bool:
    """
    Validate room number format.
    Accepts: digits, alphanumeric

    Args:
        room: Room number to validate

    Returns:
        True if valid room format
    """
    if not room:
        return False

    # Allow alphanumeric room numbers (e.g., "101", "A12", "SU01")
    return bool(re.match(r'^[A-Z0-9]{1,10}$', room.upper()))


def validate_password(password: str, min_length: int = 6) -> tuple:
    """
    Validate password strength.

    Args:
        password: Password to validate
        min_length: Minimum password length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password:
        return False, 'Password is required'

    if len(password) < min_length:
        return False, f'Password must be at least {min_length} characters'

    return True, ''


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text

    Raises:
        ValueError: If text is not a string or number
    """
    if text is None or text == '':
        return ''

    # JSON numbers are accepted as text; anything else is rejected
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        text = str(text)
    elif not isinstance(text, str):
        raise ValueError("Expected a text value")

    # Strip whitespace
    sanitized = text.strip()

    # Limit length if specified
    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized


def require_text(value, field_name: str, max_length: int = 200) -> str:
    """
    Sanitize a required text field.

    Raises:
        ValueError: If the value is empty after trimming
    """
    cleaned = sanitize_input(value if isinstance(value, str) else None, max_length)
    if not cleaned:
        raise ValueError(f"{field_name} is required")
    return cleaned


def parse_amount(value, field_name: str, allow_zero: bool = True) -> float:
    """
    Parse a currency amount.

    Args:
        value: Number or numeric string
        field_name: Field label used in error messages
        allow_zero: Whether 0 is accepted

    Returns:
        float: Parsed amount

    Raises:
        ValueError: If not a finite number, negative, or zero when not allowed
    """
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be a number") from None

    if not math.isfinite(amount):
        raise ValueError(f"{field_name} must be a number")

    if amount < 0 or (amount == 0 and not allow_zero):
        qualifier = 'non-negative' if allow_zero else 'greater than zero'
        raise ValueError(f"{field_name} must be {qualifier}")
    return amount


def parse_count(value, field_name: str, minimum: int = 0) -> int:
    """
    Parse an integer count with a lower bound (None for no bound).

    Raises:
        ValueError: If not an integer or below minimum
    """
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a whole number")
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be a whole number") from None

    if isinstance(value, float) and value != count:
        raise ValueError(f"{field_name} must be a whole number")
    if minimum is not None and count < minimum:
        raise ValueError(f"{field_name} must be at least {minimum}")
    return count
