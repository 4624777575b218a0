"""
Salaries (wages) service module.

A salary record is one wage entry for a labourer. It carries the same four
line item amounts as an invoice labour detail, so its totals, and the
totals across any set of wage entries, come from services/totals.py.

Models used: Salaries, Sites, Labour
"""

from ..models import Salaries, Sites, Labour
from ..utils import format_date, format_datetime, format_amount
from ..validators import (
    validate_optional_text, validate_choice, validate_amount, validate_date, get_related
)
from .totals import LINE_ITEM_FIELDS, recompute, totals_as_json

AMOUNT_LABELS = {
    'payment_amount': 'Payment amount',
    'piecework_payment': 'Piecework payment',
    'daily_wage': 'Daily wage',
    'advance_payment': 'Advance payment',
    'refund': 'Refund',
}


def serialize_salary(salary):
    data = {
        'salary_pk': salary.salary_pk,
        'site_id': salary.site_id,
        'labour_id': salary.labour_id,
        'payment_date': format_date(salary.payment_date),
        'payment_type': salary.payment_type,
        'payment_amount': format_amount(salary.payment_amount),
        'remarks': salary.remarks,
        'recorded_by_id': salary.recorded_by_id,
        'created_at': format_datetime(salary.created_at),
        'updated_at': format_datetime(salary.updated_at),
    }
    for field in LINE_ITEM_FIELDS:
        data[field] = format_amount(getattr(salary, field))
    data['totals'] = totals_as_json(recompute([salary]))
    return data


def clean_salary_data(data):
    cleaned = {}
    if 'site_id' in data:
        cleaned['site'] = get_related(Sites, data.get('site_id'), 'Site')
    if 'labour_id' in data:
        cleaned['labour'] = get_related(Labour, data.get('labour_id'), 'Labour')
    if 'payment_date' in data:
        cleaned['payment_date'] = validate_date(data.get('payment_date'), 'Payment date')
    if 'payment_type' in data:
        cleaned['payment_type'] = validate_choice(
            data.get('payment_type'), Salaries.PAYMENT_TYPE_CHOICES, 'payment type'
        )
    if 'remarks' in data:
        cleaned['remarks'] = validate_optional_text(data.get('remarks'), 'Remarks')
    for field, label in AMOUNT_LABELS.items():
        if field in data:
            cleaned[field] = validate_amount(data.get(field), label)
    return cleaned


def filter_salaries(site_pk=None, labour_pk=None):
    salaries = Salaries.objects.all()
    if site_pk:
        salaries = salaries.filter(site_id=site_pk)
    if labour_pk:
        salaries = salaries.filter(labour_id=labour_pk)
    return salaries


def get_salaries(site_pk=None, labour_pk=None):
    return [serialize_salary(s) for s in filter_salaries(site_pk, labour_pk)]


def get_salary(salary_pk):
    return serialize_salary(Salaries.objects.get(salary_pk=salary_pk))


def create_salary(data, user=None):
    salary = Salaries.objects.create(recorded_by=user, **clean_salary_data(data))
    return serialize_salary(salary)


def update_salary(salary_pk, data):
    salary = Salaries.objects.get(salary_pk=salary_pk)
    for field, value in clean_salary_data(data).items():
        setattr(salary, field, value)
    salary.save()
    return serialize_salary(salary)


def delete_salary(salary_pk):
    deleted, _ = Salaries.objects.filter(salary_pk=salary_pk).delete()
    return deleted > 0


def get_wage_summary(site_pk=None, labour_pk=None):
    """
    Totals across all wage entries matching the filters.

    Returns:
        dict: {'count': int, 'totals': {...}}
    """
    salaries = list(filter_salaries(site_pk, labour_pk))
    return {
        'count': len(salaries),
        'totals': totals_as_json(recompute(salaries)),
    }


def get_pending_wages(limit=5):
    pending = Salaries.objects.filter(payment_type='pending')[:limit]
    return [serialize_salary(s) for s in pending]
