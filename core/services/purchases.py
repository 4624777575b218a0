"""
Purchases service module.

Contains business logic for material purchases and their product lines.
Product line totals and the purchase total_amount are always calculated
server-side from quantity and unit_price (see services/totals.py).

Models used: Purchases, PurchaseProducts, Sites
"""

import logging
from decimal import ROUND_HALF_UP
from django.db import transaction
from django.core.exceptions import ValidationError
from ..models import Purchases, PurchaseProducts, Sites
from ..utils import format_date, format_datetime, format_amount
from ..validators import (
    validate_optional_text, validate_amount, validate_date, get_related
)
from .totals import (
    calculate_product_total, calculate_purchase_total, MAX_PURCHASE_AMOUNT, TWO_PLACES, ZERO
)

logger = logging.getLogger(__name__)


def serialize_product(product):
    return {
        'product_pk': product.product_pk,
        'purchase_id': product.purchase_id,
        'name': product.name,
        'quantity': format_amount(product.quantity),
        'units': product.units,
        'unit_price': format_amount(product.unit_price),
        'single_total': format_amount(product.single_total),
    }


def serialize_purchase(purchase, include_products=True):
    data = {
        'purchase_pk': purchase.purchase_pk,
        'site_id': purchase.site_id,
        'purchase_date': format_date(purchase.purchase_date),
        'total_amount': format_amount(purchase.total_amount),
        'invoice_number_or_img': purchase.invoice_number_or_img,
        'receipt_url': purchase.receipt.url if purchase.receipt else None,
        'item_description': purchase.item_description,
        'recorded_by_id': purchase.recorded_by_id,
        'created_at': format_datetime(purchase.created_at),
        'updated_at': format_datetime(purchase.updated_at),
    }
    if include_products:
        data['products'] = [serialize_product(p) for p in purchase.products.all()]
    return data


def clean_purchase_data(data):
    cleaned = {}
    if 'site_id' in data:
        cleaned['site'] = get_related(Sites, data.get('site_id'), 'Site')
    if 'purchase_date' in data:
        cleaned['purchase_date'] = validate_date(data.get('purchase_date'), 'Purchase date')
    if 'invoice_number_or_img' in data:
        cleaned['invoice_number_or_img'] = validate_optional_text(
            data.get('invoice_number_or_img'), 'Invoice number', max_length=50
        )
    if 'item_description' in data:
        cleaned['item_description'] = validate_optional_text(data.get('item_description'), 'Item description')
    return cleaned


def clean_products(products):
    """
    Validate product lines and calculate each line's single_total.

    Line totals and their sum must fit the 15-digit amount columns.

    Returns:
        list: dicts of PurchaseProducts field values
    """
    if not isinstance(products, list):
        raise ValidationError('Products must be a list')

    cleaned = []
    for index, product in enumerate(products, start=1):
        if not isinstance(product, dict):
            raise ValidationError(f'Product {index} must be an object')
        line = {
            'name': validate_optional_text(product.get('name'), f'Product {index} name', max_length=255),
            'quantity': validate_amount(product.get('quantity'), f'Product {index} quantity'),
            'units': validate_optional_text(product.get('units'), f'Product {index} units', max_length=50),
            'unit_price': validate_amount(product.get('unit_price'), f'Product {index} unit price'),
        }
        single_total = (line['quantity'] * line['unit_price']).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        if single_total > MAX_PURCHASE_AMOUNT:
            raise ValidationError(f'Product {index} total is too large')
        line['single_total'] = single_total
        cleaned.append(line)

    if sum((line['single_total'] for line in cleaned), ZERO) > MAX_PURCHASE_AMOUNT:
        raise ValidationError('Purchase total is too large')
    return cleaned


def _replace_products(purchase, product_lines):
    purchase.products.all().delete()
    PurchaseProducts.objects.bulk_create([
        PurchaseProducts(purchase=purchase, **line) for line in product_lines
    ])
    purchase.total_amount = calculate_purchase_total(product_lines)


def sync_purchase_total(purchase):
    """
    Recalculate every product line total and the purchase total_amount from
    the saved product lines. Used after product lines are edited outside the
    API (Django admin). A purchase with no product lines keeps its amount.
    """
    products = list(purchase.products.all())
    if not products:
        return purchase.total_amount
    for product in products:
        product.single_total = calculate_product_total(product)
    PurchaseProducts.objects.bulk_update(products, ['single_total'])
    purchase.total_amount = calculate_purchase_total(products)
    purchase.save(update_fields=['total_amount', 'updated_at'])
    return purchase.total_amount


def get_purchases(site_pk=None):
    purchases = Purchases.objects.prefetch_related('products')
    if site_pk:
        purchases = purchases.filter(site_id=site_pk)
    return [serialize_purchase(p) for p in purchases]


def get_purchase(purchase_pk):
    return serialize_purchase(Purchases.objects.get(purchase_pk=purchase_pk))


def create_purchase(data, user=None):
    """
    Create a purchase with its product lines.

    When no product lines are sent, a submitted total_amount is stored as-is
    (single-amount receipts).
    """
    cleaned = clean_purchase_data(data)
    products = data.get('products')

    with transaction.atomic():
        purchase = Purchases(recorded_by=user, **cleaned)
        if products:
            product_lines = clean_products(products)
            purchase.save()
            _replace_products(purchase, product_lines)
        else:
            purchase.total_amount = validate_amount(data.get('total_amount'), 'Total amount', max_digits=15)
        purchase.save()

    logger.info(f"Created purchase {purchase.purchase_pk} total={purchase.total_amount}")
    return serialize_purchase(purchase)


def update_purchase(purchase_pk, data):
    purchase = Purchases.objects.get(purchase_pk=purchase_pk)
    cleaned = clean_purchase_data(data)

    with transaction.atomic():
        for field, value in cleaned.items():
            setattr(purchase, field, value)
        if 'products' in data:
            _replace_products(purchase, clean_products(data.get('products') or []))
        elif 'total_amount' in data and not purchase.products.exists():
            purchase.total_amount = validate_amount(data.get('total_amount'), 'Total amount', max_digits=15)
        purchase.save()

    return serialize_purchase(purchase)


def delete_purchase(purchase_pk):
    deleted, _ = Purchases.objects.filter(purchase_pk=purchase_pk).delete()
    return deleted > 0


def attach_receipt(purchase_pk, uploaded_file):
    """Store a receipt image/PDF against a purchase (S3 or local media)."""
    purchase = Purchases.objects.get(purchase_pk=purchase_pk)
    if purchase.receipt:
        purchase.receipt.delete(save=False)
    purchase.receipt = uploaded_file
    purchase.save()
    logger.info(f"Stored receipt {purchase.receipt.name} for purchase {purchase_pk}")
    return serialize_purchase(purchase)


def get_recent_purchases(limit=5):
    return [serialize_purchase(p, include_products=False) for p in Purchases.objects.all()[:limit]]
