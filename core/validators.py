"""
Validation utilities for API payloads.

Provides reusable validators for required text, choice fields, monetary
amounts, dates and foreign keys. Each validator either returns the cleaned
value or raises ValidationError with a message suitable for a 400 response.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from django.core.exceptions import ValidationError


def validate_required_field(value, field_name):
    """
    Validate that a required field is not empty.

    Args:
        value (str): Value to validate
        field_name (str): Name of the field for error message

    Returns:
        str: Validated value (stripped)

    Raises:
        ValidationError: If value is empty
    """
    if value is None or not str(value).strip():
        raise ValidationError(f'{field_name} is required')

    return str(value).strip()


def validate_optional_text(value, field_name, max_length=None):
    """Return stripped text or None; enforce max_length when given."""
    if value is None:
        return None
    value = str(value).strip()
    if not value:
        return None
    if max_length and len(value) > max_length:
        raise ValidationError(f'{field_name} must be at most {max_length} characters')
    return value


def validate_choice(value, choices, field_name):
    """
    Validate that value is one of a model's choice keys.

    Args:
        value (str): Submitted value
        choices (list): Django choices list of (key, label) tuples
        field_name (str): Name of the field for error message

    Returns:
        str: The validated choice key

    Raises:
        ValidationError: If value is not a valid key
    """
    valid = [choice[0] for choice in choices]
    if value not in valid:
        raise ValidationError(f'Invalid {field_name}. Must be one of: {", ".join(valid)}')
    return value


def validate_amount(value, field_name, max_digits=10, required=False):
    """
    Validate a non-negative monetary amount with 2 decimal places.

    Empty values are allowed unless required and come back as Decimal('0.00').

    Args:
        value: str, int, float or Decimal
        field_name (str): Name of the field for error message
        max_digits (int): Column max_digits (2 of which are decimals)
        required (bool): Reject empty values

    Returns:
        Decimal: Amount quantized to 2 places

    Raises:
        ValidationError: If the amount is not a number, negative or too large
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f'{field_name} is required')
        return Decimal('0.00')

    if isinstance(value, bool):
        raise ValidationError(f'{field_name} must be a number')

    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f'{field_name} must be a number')

    if not amount.is_finite():
        raise ValidationError(f'{field_name} must be a number')
    if amount < 0:
        raise ValidationError(f'{field_name} cannot be negative')

    limit = Decimal(10) ** (max_digits - 2)
    if amount >= limit:
        raise ValidationError(f'{field_name} is too large')

    amount = amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    if amount >= limit:
        raise ValidationError(f'{field_name} is too large')

    return amount


def validate_optional_amount(value, field_name, max_digits=10):
    """Like validate_amount, but empty values come back as None."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return validate_amount(value, field_name, max_digits=max_digits)


def validate_date(value, field_name, required=False):
    """
    Parse a date from 'YYYY-MM-DD' or an ISO datetime string.

    Returns:
        date or None

    Raises:
        ValidationError: If the value cannot be parsed
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f'{field_name} is required')
        return None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    value = str(value).strip()
    try:
        return datetime.strptime(value[:10], '%Y-%m-%d').date()
    except ValueError:
        raise ValidationError(f'{field_name} must be a date in YYYY-MM-DD format')


def validate_contact_number(value):
    """
    Validate a phone number (digits, spaces, dashes, optional leading +).

    Returns:
        str or None: The number as submitted (stripped)
    """
    if not value:
        return None
    value = str(value).strip()
    if not re.match(r'^\+?[\d\s\-]{6,20}$', value):
        raise ValidationError('Contact number must contain 6-20 digits')
    return value


def validate_id(value, field_name):
    """Parse an integer primary key, returning None for empty values."""
    if value is None or value == '':
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f'{field_name} must be an integer')
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field_name} must be an integer')


def get_related(model, value, field_name, required=False):
    """
    Resolve a foreign key id to a model instance.

    Args:
        model: Django model class
        value: Submitted id
        field_name (str): Name of the field for error message
        required (bool): Reject empty values

    Returns:
        Model instance or None

    Raises:
        ValidationError: If the id is invalid or does not exist
    """
    pk = validate_id(value, field_name)
    if pk is None:
        if required:
            raise ValidationError(f'{field_name} is required')
        return None
    try:
        return model.objects.get(pk=pk)
    except model.DoesNotExist:
        raise ValidationError(f'{field_name} {pk} does not exist')
