"""
Totals service module.

Contains the line-item totals calculation shared by invoices and wage records.
Every payroll/invoice line carries four monetary fields:

- piecework_payment
- daily_wage
- advance_payment
- refund

Totals are always derived from the current line items, never kept as
independent state:

    grand_total = total_piecework + total_daily_wage
                  - total_advance_payment + total_refund

Malformed values (empty strings, text, NaN, negatives, amounts that do not fit
the 10-digit column) count as zero so the calculation itself never fails.
Field validation on entry belongs to core.validators.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

LINE_ITEM_FIELDS = ('piecework_payment', 'daily_wage', 'advance_payment', 'refund')

TOTAL_FIELDS = {
    'piecework_payment': 'total_piecework',
    'daily_wage': 'total_daily_wage',
    'advance_payment': 'total_advance_payment',
    'refund': 'total_refund',
}

TWO_PLACES = Decimal('0.01')
ZERO = Decimal('0.00')

# Line item columns are DecimalField(max_digits=10, decimal_places=2)
MAX_LINE_AMOUNT = Decimal('99999999.99')


def to_amount(value, max_amount=MAX_LINE_AMOUNT):
    """
    Coerce a raw field value to a 2-place Decimal.

    Args:
        value: Decimal, int, float, str or None
        max_amount: Largest accepted magnitude

    Returns:
        Decimal: The amount, or Decimal('0.00') when the value is missing,
        unparseable, non-finite, negative or out of range
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, str):
        value = value.strip().replace(',', '')
        if not value:
            return ZERO
    try:
        # str() keeps floats like 0.1 from dragging binary noise into the sum
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not amount.is_finite() or amount < 0 or amount > max_amount:
        return ZERO
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def get_field(item, field):
    """Read a line item field from a dict or a model instance."""
    if isinstance(item, dict):
        return item.get(field)
    return getattr(item, field, None)


def empty_totals():
    return {
        'total_piecework': ZERO,
        'total_daily_wage': ZERO,
        'total_advance_payment': ZERO,
        'total_refund': ZERO,
        'grand_total': ZERO,
    }


def recompute(items):
    """
    Calculate category totals and the grand total for a sequence of line items.

    Args:
        items: Iterable of line items (dicts or objects exposing the four fields)

    Returns:
        dict: total_piecework, total_daily_wage, total_advance_payment,
        total_refund and grand_total as Decimals
    """
    totals = empty_totals()
    for item in items:
        for field, total_key in TOTAL_FIELDS.items():
            totals[total_key] += to_amount(get_field(item, field))

    totals['grand_total'] = (
        totals['total_piecework']
        + totals['total_daily_wage']
        - totals['total_advance_payment']
        + totals['total_refund']
    )
    return totals


def add_item(items, new_item):
    """
    Append a line item.

    Returns:
        tuple: (new list of items, recomputed totals)
    """
    updated = list(items) + [new_item]
    return updated, recompute(updated)


def remove_item(items, index):
    """
    Remove the line item at index.

    Raises:
        IndexError: If index is out of range

    Returns:
        tuple: (new list of items, recomputed totals)
    """
    updated = list(items)
    del updated[index]
    return updated, recompute(updated)


def replace_item(items, index, item):
    """
    Replace the line item at index with an edited version.

    Raises:
        IndexError: If index is out of range

    Returns:
        tuple: (new list of items, recomputed totals)
    """
    updated = list(items)
    updated[index] = item
    return updated, recompute(updated)


def apply_totals(instance, totals):
    """Copy a totals dict onto a model instance (does not save)."""
    for key, value in totals.items():
        setattr(instance, key, value)
    return instance


def totals_as_json(totals):
    """Convert Decimal totals to floats for JsonResponse payloads."""
    return {key: float(value) for key, value in totals.items()}


# ============================================================================
# PURCHASE PRODUCTS
# ============================================================================

# single_total/total_amount are DecimalField(max_digits=15, decimal_places=2)
MAX_PURCHASE_AMOUNT = Decimal('9999999999999.99')


def calculate_product_total(product):
    """
    Calculate quantity * unit_price for a purchase product line.

    Args:
        product: dict or PurchaseProduct instance

    Returns:
        Decimal: Line total rounded to 2 places
    """
    quantity = to_amount(get_field(product, 'quantity'))
    unit_price = to_amount(get_field(product, 'unit_price'))
    total = (quantity * unit_price).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    return total if total <= MAX_PURCHASE_AMOUNT else ZERO


def calculate_purchase_total(products):
    """
    Sum product line totals for a purchase.

    Returns:
        Decimal: total_amount for the purchase
    """
    return sum((calculate_product_total(p) for p in products), ZERO)
