"""
Tests for input validation utilities.
"""

import pytest
from utils.validators import (
    validate_email,
    validate_phone,
    validate_room_number,
    validate_password,
    sanitize_input,
    require_text,
    parse_amount,
    parse_count,
)


class TestValidateEmail:

    def test_valid_email(self):
        assert validate_email('guest@example.com') is True
        assert validate_email('front.desk+june@resort.co.in') is True

    def test_invalid_email(self):
        assert validate_email('') is False
        assert validate_email(None) is False
        assert validate_email('missing@domain') is False
        assert validate_email('spaces in@email.com') is False


class TestValidatePhone:
    """Tests for Indian mobile number validation."""

    def test_valid_indian_mobiles(self):
        assert validate_phone('+919876543210') is True
        assert validate_phone('919876543210') is True
        assert validate_phone('9876543210') is True
        assert validate_phone('09876543210') is True
        assert validate_phone('6123456789') is True

    def test_valid_phones_with_separators(self):
        assert validate_phone('+91 98765 43210') is True
        assert validate_phone('98765-43210') is True
        assert validate_phone('(987) 654 3210') is True

    def test_invalid_phones(self):
        assert validate_phone('') is False
        assert validate_phone(None) is False
        assert validate_phone('5876543210') is False  # Doesn't start with 6-9
        assert validate_phone('98765') is False  # Too short
        assert validate_phone('98765abcde') is False


class TestValidateRoomNumber:

    def test_valid_room_numbers(self):
        assert validate_room_number('101') is True
        assert validate_room_number('a12') is True
        assert validate_room_number('PV501') is True

    def test_invalid_room_numbers(self):
        assert validate_room_number('') is False
        assert validate_room_number(None) is False
        assert validate_room_number('POOLVILLA01') is False  # Too long
        assert validate_room_number('10-1') is False


class TestValidatePassword:

    def test_valid_password(self):
        assert validate_password('password123') == (True, '')

    def test_password_too_short(self):
        is_valid, msg = validate_password('12345')
        assert is_valid is False
        assert msg == 'Password must be at least 6 characters'

    def test_password_empty(self):
        assert validate_password('') == (False, 'Password is required')
        assert validate_password(None)[0] is False


class TestSanitizeInput:

    def test_trim_and_limit(self):
        assert sanitize_input('  Sea view  ') == 'Sea view'
        assert sanitize_input('hello world', max_length=5) == 'hello'

    def test_empty_input(self):
        assert sanitize_input('') == ''
        assert sanitize_input(None) == ''

    def test_non_text_values(self):
        assert sanitize_input(5) == '5'
        with pytest.raises(ValueError, match='Expected a text value'):
            sanitize_input(['Suite'])
        with pytest.raises(ValueError):
            sanitize_input(True)

    def test_require_text(self):
        assert require_text('  Asha ', 'Name') == 'Asha'
        with pytest.raises(ValueError, match='Name is required'):
            require_text('   ', 'Name')
        with pytest.raises(ValueError):
            require_text(42, 'Name')


class TestParseNumbers:

    def test_parse_amount(self):
        assert parse_amount('2500.50', 'Amount') == 2500.5
        assert parse_amount(0, 'Amount') == 0

    def test_parse_amount_errors(self):
        with pytest.raises(ValueError, match='must be a number'):
            parse_amount('abc', 'Amount')
        with pytest.raises(ValueError, match='must be non-negative'):
            parse_amount(-1, 'Amount')
        with pytest.raises(ValueError, match='must be greater than zero'):
            parse_amount(0, 'Amount', allow_zero=False)

    @pytest.mark.parametrize('value', ['nan', 'inf', '-inf', float('nan'), float('inf')])
    def test_parse_amount_rejects_non_finite(self, value):
        with pytest.raises(ValueError, match='Amount must be a number'):
            parse_amount(value, 'Amount')

    def test_parse_count(self):
        assert parse_count('3', 'Guests') == 3
        assert parse_count(2.0, 'Guests') == 2
        assert parse_count(-4, 'Delta', minimum=None) == -4

    def test_parse_count_errors(self):
        with pytest.raises(ValueError):
            parse_count(True, 'Guests')
        with pytest.raises(ValueError):
            parse_count(2.5, 'Guests')
        with pytest.raises(ValueError, match='at least 1'):
            parse_count(0, 'Guests', minimum=1)
