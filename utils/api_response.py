"""
Standardized API response helpers.

Provides consistent JSON response format across all API endpoints:

    Success:  {"success": true, "data": {...}, "message": "..."}
    Error:    {"success": false, "error": "Human readable error message"}
    Warning:  {"success": true, "data": {...}, "warning": "..."}

Usage:
    from utils.api_response import api_success, api_error

    return api_success(data={"id": 1}, message="Room created")
    return api_error("Room not found", status=404)
"""

from flask import jsonify
from typing import Any


def api_success(
    data: dict | None = None,
    message: str | None = None,
    warning: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Build a standardized success JSON response.

    Args:
        data: Optional dict to include as 'data' key.
        message: Optional success message.
        warning: Optional warning message.
        status: HTTP status code (default 200).
        **extra_fields: Additional top-level fields to include in the response.
            Use sparingly for backward-compatible fields that frontend
            already reads at the top level (e.g., booking_id).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': True}

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if warning:
        response['warning'] = warning

    # Merge extra fields at top level for backward compatibility
    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_error(error: str, status: int = 400, **extra_fields: Any) -> tuple:
    """
    Build a standardized error JSON response.

    Args:
        error: Error message.
        status: HTTP status code (default 400).
        **extra_fields: Additional top-level fields (e.g., conflicts, field errors).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': False, 'error': error}

    # Merge extra fields for additional error context
    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_not_found(entity: str) -> tuple:
    """
    Build a 404 error response for a missing record.

    Args:
        entity: Record label, e.g. 'Room' or 'Booking'.

    Returns:
        Tuple of (Response, status_code)
    """
    return api_error(f'{entity} not found', status=404)


def get_json_payload() -> dict:
    """Return the request JSON body as a dict (empty when absent or not an object)."""
    from flask import request

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}
