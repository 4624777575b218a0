"""
Labour service module.

Contains business logic for labour groups (teams) and individual labourers.

Models used: LabourGroups, Labour, Sites
"""

from ..models import LabourGroups, Labour, Sites
from ..utils import format_date, format_datetime, format_amount
from ..validators import (
    validate_required_field, validate_optional_text, validate_choice,
    validate_optional_amount, validate_date, validate_contact_number, get_related
)


# ============================================================================
# LABOUR GROUPS
# ============================================================================

def serialize_labour_group(group):
    return {
        'group_pk': group.group_pk,
        'group_name': group.group_name,
        'description': group.description,
        'site_id': group.site_id,
        'created_at': format_datetime(group.created_at),
        'updated_at': format_datetime(group.updated_at),
    }


def clean_labour_group_data(data, partial=False):
    cleaned = {}
    if not partial or 'group_name' in data:
        cleaned['group_name'] = validate_required_field(data.get('group_name'), 'Group name')
    if 'description' in data:
        cleaned['description'] = validate_optional_text(data.get('description'), 'Description')
    if 'site_id' in data:
        cleaned['site'] = get_related(Sites, data.get('site_id'), 'Site')
    return cleaned


def get_labour_groups(site_pk=None):
    groups = LabourGroups.objects.all()
    if site_pk:
        groups = groups.filter(site_id=site_pk)
    return [serialize_labour_group(g) for g in groups]


def get_labour_group(group_pk):
    return serialize_labour_group(LabourGroups.objects.get(group_pk=group_pk))


def create_labour_group(data):
    group = LabourGroups.objects.create(**clean_labour_group_data(data))
    return serialize_labour_group(group)


def update_labour_group(group_pk, data):
    group = LabourGroups.objects.get(group_pk=group_pk)
    for field, value in clean_labour_group_data(data, partial=True).items():
        setattr(group, field, value)
    group.save()
    return serialize_labour_group(group)


def delete_labour_group(group_pk):
    deleted, _ = LabourGroups.objects.filter(group_pk=group_pk).delete()
    return deleted > 0


# ============================================================================
# LABOUR
# ============================================================================

def serialize_labour(labour):
    return {
        'labour_pk': labour.labour_pk,
        'site_id': labour.site_id,
        'labour_group_id': labour.labour_group_id,
        'full_name': labour.full_name,
        'labour_type': labour.labour_type,
        'contact_number': labour.contact_number,
        'address': labour.address,
        'daily_wage': format_amount(labour.daily_wage),
        'monthly_salary': format_amount(labour.monthly_salary),
        'join_date': format_date(labour.join_date),
        'status': labour.status,
        'recorded_by_id': labour.recorded_by_id,
        'created_at': format_datetime(labour.created_at),
        'updated_at': format_datetime(labour.updated_at),
    }


def clean_labour_data(data, partial=False):
    cleaned = {}
    if not partial or 'full_name' in data:
        cleaned['full_name'] = validate_required_field(data.get('full_name'), 'Full name')
    if not partial or 'labour_type' in data:
        cleaned['labour_type'] = validate_choice(data.get('labour_type'), Labour.LABOUR_TYPE_CHOICES, 'labour type')
    if 'site_id' in data:
        cleaned['site'] = get_related(Sites, data.get('site_id'), 'Site')
    if 'labour_group_id' in data:
        cleaned['labour_group'] = get_related(LabourGroups, data.get('labour_group_id'), 'Labour group')
    if 'contact_number' in data:
        cleaned['contact_number'] = validate_contact_number(data.get('contact_number'))
    if 'address' in data:
        cleaned['address'] = validate_optional_text(data.get('address'), 'Address')
    if 'daily_wage' in data:
        cleaned['daily_wage'] = validate_optional_amount(data.get('daily_wage'), 'Daily wage')
    if 'monthly_salary' in data:
        cleaned['monthly_salary'] = validate_optional_amount(data.get('monthly_salary'), 'Monthly salary')
    if 'join_date' in data:
        cleaned['join_date'] = validate_date(data.get('join_date'), 'Join date')
    if 'status' in data:
        cleaned['status'] = validate_choice(data.get('status'), Labour.STATUS_CHOICES, 'status')
    return cleaned


def get_labour(site_pk=None):
    labour = Labour.objects.all()
    if site_pk:
        labour = labour.filter(site_id=site_pk)
    return [serialize_labour(l) for l in labour]


def get_labour_by_id(labour_pk):
    return serialize_labour(Labour.objects.get(labour_pk=labour_pk))


def create_labour(data, user=None):
    labour = Labour.objects.create(recorded_by=user, **clean_labour_data(data))
    return serialize_labour(labour)


def update_labour(labour_pk, data):
    labour = Labour.objects.get(labour_pk=labour_pk)
    for field, value in clean_labour_data(data, partial=True).items():
        setattr(labour, field, value)
    labour.save()
    return serialize_labour(labour)


def delete_labour(labour_pk):
    deleted, _ = Labour.objects.filter(labour_pk=labour_pk).delete()
    return deleted > 0
