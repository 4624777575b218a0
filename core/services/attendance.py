"""
Attendance service module.

Daily attendance entries per labourer and site.

Models used: Attendance, Sites, Labour
"""

from django.core.exceptions import ValidationError
from ..models import Attendance, Sites, Labour
from ..utils import format_date, format_datetime, format_amount
from ..validators import (
    validate_optional_text, validate_choice, validate_optional_amount, validate_date, get_related
)


def serialize_attendance(entry):
    return {
        'attendance_pk': entry.attendance_pk,
        'site_id': entry.site_id,
        'labour_id': entry.labour_id,
        'date': format_date(entry.date),
        'status': entry.status,
        'hours_worked': format_amount(entry.hours_worked),
        'remarks': entry.remarks,
        'recorded_by_id': entry.recorded_by_id,
        'created_at': format_datetime(entry.created_at),
    }


def clean_attendance_data(data):
    cleaned = {}
    if 'site_id' in data:
        cleaned['site'] = get_related(Sites, data.get('site_id'), 'Site')
    if 'labour_id' in data:
        cleaned['labour'] = get_related(Labour, data.get('labour_id'), 'Labour')
    if 'date' in data:
        cleaned['date'] = validate_date(data.get('date'), 'Date')
    if 'status' in data:
        cleaned['status'] = validate_choice(data.get('status'), Attendance.STATUS_CHOICES, 'status')
    if 'hours_worked' in data:
        hours = validate_optional_amount(data.get('hours_worked'), 'Hours worked', max_digits=4)
        if hours is not None and hours > 24:
            raise ValidationError('Hours worked cannot exceed 24')
        cleaned['hours_worked'] = hours
    if 'remarks' in data:
        cleaned['remarks'] = validate_optional_text(data.get('remarks'), 'Remarks')
    return cleaned


def get_attendance(site_pk=None, labour_pk=None, on_date=None):
    entries = Attendance.objects.all()
    if site_pk:
        entries = entries.filter(site_id=site_pk)
    if labour_pk:
        entries = entries.filter(labour_id=labour_pk)
    if on_date:
        entries = entries.filter(date=on_date)
    return [serialize_attendance(e) for e in entries]


def create_attendance(data, user=None):
    entry = Attendance.objects.create(recorded_by=user, **clean_attendance_data(data))
    return serialize_attendance(entry)


def update_attendance(attendance_pk, data):
    entry = Attendance.objects.get(attendance_pk=attendance_pk)
    for field, value in clean_attendance_data(data).items():
        setattr(entry, field, value)
    entry.save()
    return serialize_attendance(entry)


def delete_attendance(attendance_pk):
    deleted, _ = Attendance.objects.filter(attendance_pk=attendance_pk).delete()
    return deleted > 0
