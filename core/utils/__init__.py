"""
Core utilities package.
"""

from .api import (
    api_login_required,
    parse_json_body,
    get_query_int,
    validation_message,
    error_response,
    success_response,
    format_date,
    format_datetime,
    format_amount,
)

__all__ = [
    'api_login_required',
    'parse_json_body',
    'get_query_int',
    'validation_message',
    'error_response',
    'success_response',
    'format_date',
    'format_datetime',
    'format_amount',
]
