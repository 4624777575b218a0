"""
Sites service module.

Contains business logic for construction site records.

Models used: Sites
"""

from ..models import Sites
from ..utils import format_date, format_datetime, format_amount
from ..validators import (
    validate_required_field, validate_optional_text, validate_choice,
    validate_optional_amount, validate_date
)
from django.core.exceptions import ValidationError


def serialize_site(site):
    return {
        'site_pk': site.site_pk,
        'site_name': site.site_name,
        'owner_id': site.owner_id,
        'location': site.location,
        'start_date': format_date(site.start_date),
        'end_date': format_date(site.end_date),
        'budget': format_amount(site.budget),
        'status': site.status,
        'created_at': format_datetime(site.created_at),
        'updated_at': format_datetime(site.updated_at),
    }


def clean_site_data(data, partial=False):
    """
    Validate a site payload.

    Args:
        data: Decoded JSON dict
        partial: Only validate keys present in data (PUT)

    Returns:
        dict: Model field values
    """
    cleaned = {}
    if not partial or 'site_name' in data:
        cleaned['site_name'] = validate_required_field(data.get('site_name'), 'Site name')
    if 'location' in data:
        cleaned['location'] = validate_optional_text(data.get('location'), 'Location')
    if 'start_date' in data:
        cleaned['start_date'] = validate_date(data.get('start_date'), 'Start date')
    if 'end_date' in data:
        cleaned['end_date'] = validate_date(data.get('end_date'), 'End date')
    if 'budget' in data:
        cleaned['budget'] = validate_optional_amount(data.get('budget'), 'Budget', max_digits=15)
    if 'status' in data:
        cleaned['status'] = validate_choice(data.get('status'), Sites.STATUS_CHOICES, 'status')

    start, end = cleaned.get('start_date'), cleaned.get('end_date')
    if start and end and end < start:
        raise ValidationError('End date cannot be before start date')
    return cleaned


def get_sites():
    return [serialize_site(s) for s in Sites.objects.all()]


def get_site(site_pk):
    return serialize_site(Sites.objects.get(site_pk=site_pk))


def create_site(data, user=None):
    cleaned = clean_site_data(data)
    site = Sites.objects.create(owner=user, **cleaned)
    return serialize_site(site)


def update_site(site_pk, data):
    site = Sites.objects.get(site_pk=site_pk)
    for field, value in clean_site_data(data, partial=True).items():
        setattr(site, field, value)
    site.save()
    return serialize_site(site)


def delete_site(site_pk):
    deleted, _ = Sites.objects.filter(site_pk=site_pk).delete()
    return deleted > 0


def get_recent_sites(limit=5):
    return [serialize_site(s) for s in Sites.objects.all()[:limit]]
