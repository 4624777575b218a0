"""
Invoices service module.

Contains business logic for labour invoices and their labour detail lines.

Totals handling:
- Client-supplied totals are ignored. Stored totals are rewritten from the
  labour details whenever a detail is added, edited or removed.
- Serialized invoices always carry totals recomputed from the details, so a
  detail edited outside this module can never leave a stale total visible.

Models used: Invoices, InvoiceLabourDetail, Labour, LabourGroups, Sites
"""

import logging
from django.db import transaction
from django.core.exceptions import ValidationError
from ..models import Invoices, InvoiceLabourDetail, Labour, LabourGroups, Sites
from ..utils import format_date, format_datetime, format_amount
from ..validators import (
    validate_required_field, validate_optional_text, validate_choice,
    validate_amount, validate_date, validate_id, get_related
)
from .totals import (
    LINE_ITEM_FIELDS, recompute, add_item, remove_item, replace_item,
    apply_totals, totals_as_json
)

logger = logging.getLogger(__name__)

TOTAL_UPDATE_FIELDS = [
    'total_piecework', 'total_daily_wage', 'total_advance_payment',
    'total_refund', 'grand_total', 'updated_at'
]

DETAIL_AMOUNT_LABELS = {
    'piecework_payment': 'piecework payment',
    'daily_wage': 'daily wage',
    'advance_payment': 'advance payment',
    'refund': 'refund',
}


# ============================================================================
# SERIALIZATION
# ============================================================================

def serialize_labour_detail(detail):
    data = {
        'detail_pk': detail.detail_pk,
        'invoice_id': detail.invoice_id,
        'labour_id': detail.labour_id,
        'labour_group_id': detail.labour_group_id,
        'sign': detail.sign,
    }
    for field in LINE_ITEM_FIELDS:
        data[field] = format_amount(getattr(detail, field))
    return data


def serialize_invoice(invoice, include_details=True):
    details = list(invoice.labour_details.all())
    data = {
        'invoice_pk': invoice.invoice_pk,
        'site_id': invoice.site_id,
        'recorded_by_id': invoice.recorded_by_id,
        'invoice_number': invoice.invoice_number,
        'invoice_date': format_date(invoice.invoice_date),
        'payment_status': invoice.payment_status,
        'created_at': format_datetime(invoice.created_at),
        'updated_at': format_datetime(invoice.updated_at),
    }
    data.update(totals_as_json(recompute(details)))
    if include_details:
        data['labour_details'] = [serialize_labour_detail(d) for d in details]
    return data


# ============================================================================
# VALIDATION
# ============================================================================

def clean_invoice_data(data, partial=False, invoice_pk=None):
    cleaned = {}
    if not partial or 'invoice_number' in data:
        number = validate_required_field(data.get('invoice_number'), 'Invoice number')
        if len(number) > 50:
            raise ValidationError('Invoice number must be at most 50 characters')
        duplicates = Invoices.objects.filter(invoice_number=number)
        if invoice_pk:
            duplicates = duplicates.exclude(invoice_pk=invoice_pk)
        if duplicates.exists():
            raise ValidationError(f'Invoice number {number} already exists')
        cleaned['invoice_number'] = number
    if 'site_id' in data:
        cleaned['site'] = get_related(Sites, data.get('site_id'), 'Site')
    if 'invoice_date' in data:
        cleaned['invoice_date'] = validate_date(data.get('invoice_date'), 'Invoice date')
    if 'payment_status' in data:
        cleaned['payment_status'] = validate_choice(
            data.get('payment_status'), Invoices.PAYMENT_STATUS_CHOICES, 'payment status'
        )
    return cleaned


def clean_labour_detail(detail, position=1):
    """
    Validate one labour detail line.

    Amounts must be non-negative numbers; empty amounts become 0.

    Returns:
        dict: InvoiceLabourDetail field values (plus 'detail_pk' if sent)
    """
    if not isinstance(detail, dict):
        raise ValidationError(f'Labour detail {position} must be an object')

    cleaned = {
        'labour': get_related(Labour, detail.get('labour_id'), f'Labour detail {position} labour'),
        'labour_group': get_related(
            LabourGroups, detail.get('labour_group_id'), f'Labour detail {position} labour group'
        ),
        'sign': validate_optional_text(detail.get('sign'), f'Labour detail {position} sign', max_length=255),
    }
    for field, label in DETAIL_AMOUNT_LABELS.items():
        cleaned[field] = validate_amount(detail.get(field), f'Labour detail {position} {label}')

    detail_pk = validate_id(detail.get('detail_pk'), f'Labour detail {position} id')
    if detail_pk:
        cleaned['detail_pk'] = detail_pk
    return cleaned


def clean_labour_details(details):
    if not isinstance(details, list):
        raise ValidationError('Labour details must be a list')
    return [clean_labour_detail(d, position) for position, d in enumerate(details, start=1)]


# ============================================================================
# TOTALS
# ============================================================================

def save_totals(invoice, totals):
    apply_totals(invoice, totals)
    invoice.save(update_fields=TOTAL_UPDATE_FIELDS)
    return totals


def sync_invoice_totals(invoice):
    """
    Rewrite an invoice's stored totals from its labour details.

    Returns:
        dict: The recomputed totals (Decimals)
    """
    return save_totals(invoice, recompute(invoice.labour_details.all()))


def stored_totals(invoice):
    return {
        'total_piecework': invoice.total_piecework,
        'total_daily_wage': invoice.total_daily_wage,
        'total_advance_payment': invoice.total_advance_payment,
        'total_refund': invoice.total_refund,
        'grand_total': invoice.grand_total,
    }


def recompute_invoice_totals(invoice_pks=None, dry_run=False):
    """
    Re-derive stored totals for invoices whose details changed outside the API.

    Args:
        invoice_pks: Optional list of invoice ids (default: all invoices)
        dry_run: Report differences without saving

    Returns:
        list: [{'invoice_pk', 'invoice_number', 'stored', 'recomputed'}] for
        every invoice whose stored totals were out of date
    """
    invoices = Invoices.objects.prefetch_related('labour_details')
    if invoice_pks:
        invoices = invoices.filter(invoice_pk__in=invoice_pks)

    changed = []
    for invoice in invoices:
        before = stored_totals(invoice)
        after = recompute(invoice.labour_details.all())
        if before == after:
            continue
        changed.append({
            'invoice_pk': invoice.invoice_pk,
            'invoice_number': invoice.invoice_number,
            'stored': totals_as_json(before),
            'recomputed': totals_as_json(after),
        })
        if not dry_run:
            with transaction.atomic():
                save_totals(invoice, after)
            logger.info(f"Resynced totals for invoice {invoice.invoice_number}: grand_total {before['grand_total']} -> {after['grand_total']}")
    return changed


# ============================================================================
# INVOICES
# ============================================================================

def get_invoices(site_pk=None):
    invoices = Invoices.objects.prefetch_related('labour_details')
    if site_pk:
        invoices = invoices.filter(site_id=site_pk)
    return [serialize_invoice(i) for i in invoices]


def get_invoice(invoice_pk):
    return serialize_invoice(Invoices.objects.get(invoice_pk=invoice_pk))


def _save_labour_details(invoice, detail_lines):
    """
    Make the invoice's labour details match detail_lines.

    Lines with a detail_pk belonging to this invoice are updated, lines
    without one are created, and existing details not listed are deleted.
    """
    existing = {d.detail_pk: d for d in invoice.labour_details.all()}
    keep = set()

    for line in detail_lines:
        detail_pk = line.pop('detail_pk', None)
        if detail_pk is not None:
            if detail_pk not in existing:
                raise ValidationError(f'Labour detail {detail_pk} does not belong to this invoice')
            detail = existing[detail_pk]
            for field, value in line.items():
                setattr(detail, field, value)
            detail.save()
            keep.add(detail_pk)
        else:
            InvoiceLabourDetail.objects.create(invoice=invoice, **line)

    stale = [pk for pk in existing if pk not in keep]
    if stale:
        InvoiceLabourDetail.objects.filter(detail_pk__in=stale).delete()


def create_invoice(data, user=None):
    """
    Create an invoice together with its labour details.

    Args:
        data: Decoded JSON with invoice fields and an optional
            'labour_details' list
        user: Recording user

    Returns:
        dict: Serialized invoice with recomputed totals
    """
    cleaned = clean_invoice_data(data)
    detail_lines = clean_labour_details(data.get('labour_details') or [])
    for line in detail_lines:
        # New invoice: any ids sent by the client refer to nothing
        line.pop('detail_pk', None)

    with transaction.atomic():
        invoice = Invoices.objects.create(recorded_by=user, **cleaned)
        _save_labour_details(invoice, detail_lines)
        totals = sync_invoice_totals(invoice)

    logger.info(f"Created invoice {invoice.invoice_number} with {len(detail_lines)} labour details, grand_total={totals['grand_total']}")
    return serialize_invoice(invoice)


def update_invoice(invoice_pk, data):
    """
    Update invoice fields and, when 'labour_details' is sent, replace the
    detail set. Totals are re-synced either way.
    """
    with transaction.atomic():
        invoice = Invoices.objects.select_for_update().get(invoice_pk=invoice_pk)
        cleaned = clean_invoice_data(data, partial=True, invoice_pk=invoice_pk)
        for field, value in cleaned.items():
            setattr(invoice, field, value)
        invoice.save()

        if 'labour_details' in data:
            _save_labour_details(invoice, clean_labour_details(data.get('labour_details') or []))
        sync_invoice_totals(invoice)

    return serialize_invoice(invoice)


def delete_invoice(invoice_pk):
    deleted, _ = Invoices.objects.filter(invoice_pk=invoice_pk).delete()
    return deleted > 0


# ============================================================================
# LABOUR DETAILS
# ============================================================================

def get_invoice_labour_details(invoice_pk):
    details = InvoiceLabourDetail.objects.filter(invoice_id=invoice_pk)
    return [serialize_labour_detail(d) for d in details]


def _detail_index(details, detail_pk):
    for index, detail in enumerate(details):
        if detail.detail_pk == detail_pk:
            return index
    raise InvoiceLabourDetail.DoesNotExist(f'Labour detail {detail_pk} not found')


def add_labour_detail(data):
    """
    Add one labour detail to an existing invoice and re-sync its totals.

    Returns:
        dict: {'labour_detail': ..., 'totals': ...}
    """
    invoice_pk = validate_id(data.get('invoice_id'), 'Invoice')
    if invoice_pk is None:
        raise ValidationError('Invoice is required')
    line = clean_labour_detail(data)
    line.pop('detail_pk', None)

    with transaction.atomic():
        invoice = Invoices.objects.select_for_update().get(invoice_pk=invoice_pk)
        details = list(invoice.labour_details.all())
        detail = InvoiceLabourDetail.objects.create(invoice=invoice, **line)
        _, totals = add_item(details, detail)
        save_totals(invoice, totals)

    return {
        'labour_detail': serialize_labour_detail(detail),
        'totals': totals_as_json(totals),
    }


def update_labour_detail(detail_pk, data):
    """Edit one labour detail in place and re-sync the parent invoice totals."""
    with transaction.atomic():
        detail = InvoiceLabourDetail.objects.select_related('invoice').get(detail_pk=detail_pk)
        invoice = Invoices.objects.select_for_update().get(invoice_pk=detail.invoice_id)

        merged = serialize_labour_detail(detail)
        merged.update(data)
        line = clean_labour_detail(merged)
        line.pop('detail_pk', None)
        for field, value in line.items():
            setattr(detail, field, value)
        detail.save()

        details = list(invoice.labour_details.all())
        _, totals = replace_item(details, _detail_index(details, detail_pk), detail)
        save_totals(invoice, totals)

    return {
        'labour_detail': serialize_labour_detail(detail),
        'totals': totals_as_json(totals),
    }


def remove_labour_detail(detail_pk):
    """
    Delete one labour detail and re-sync the parent invoice totals.

    Returns:
        dict: {'invoice_id': int, 'totals': ...}
    """
    with transaction.atomic():
        detail = InvoiceLabourDetail.objects.get(detail_pk=detail_pk)
        invoice = Invoices.objects.select_for_update().get(invoice_pk=detail.invoice_id)
        details = list(invoice.labour_details.all())
        _, totals = remove_item(details, _detail_index(details, detail_pk))
        detail.delete()
        save_totals(invoice, totals)

    return {
        'invoice_id': invoice.invoice_pk,
        'totals': totals_as_json(totals),
    }


def get_pending_invoice_count():
    return Invoices.objects.filter(payment_status='credit').count()
