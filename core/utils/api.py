"""
Helpers shared by the JSON API views.

Provides the authentication decorator, request body parsing and the
standard {'status': ..., 'message': ...} response shapes.
"""

import json
from functools import wraps
from django.http import JsonResponse


def api_login_required(view_func):
    """
    Require an authenticated session user.

    Unlike django.contrib.auth's login_required this returns a JSON 401
    instead of redirecting to the login page.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return error_response('Authentication required', status=401)
        return view_func(request, *args, **kwargs)
    return wrapper


def parse_json_body(request):
    """
    Decode a JSON object request body.

    Raises:
        json.JSONDecodeError: If the body is not valid JSON or not an object
    """
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except UnicodeDecodeError as e:
        raise json.JSONDecodeError(str(e), request.body.decode(errors='replace'), 0)
    if not isinstance(data, dict):
        raise json.JSONDecodeError('Expected a JSON object', request.body.decode(errors='replace'), 0)
    return data


def get_query_int(request, name):
    """
    Read an optional integer query parameter.

    Returns:
        int or None: None when missing or not an integer
    """
    value = request.GET.get(name)
    if value in (None, ''):
        return None
    try:
        return int(value)
    except ValueError:
        return None


def validation_message(error):
    """Flatten a ValidationError into a single message string."""
    return '; '.join(error.messages)


def error_response(message, status=400):
    return JsonResponse({
        'status': 'error',
        'message': message
    }, status=status)


def success_response(payload=None, status=200, message=None):
    body = {'status': 'success'}
    if message:
        body['message'] = message
    if payload:
        body.update(payload)
    return JsonResponse(body, status=status)


def format_date(value):
    return value.strftime('%Y-%m-%d') if value else None


def format_datetime(value):
    return value.isoformat() if value else None


def format_amount(value):
    return float(value) if value is not None else None
