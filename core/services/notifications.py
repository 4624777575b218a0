"""
Notifications service module.

Notifications belong to a user; notifications with no user are shown to
everyone.

Models used: Notifications
"""

from django.db.models import Q
from django.utils import timezone
from ..models import Notifications
from ..utils import format_datetime
from ..validators import (
    validate_required_field, validate_optional_text, validate_choice, validate_id
)


def serialize_notification(notification):
    return {
        'notification_pk': notification.notification_pk,
        'user_id': notification.user_id,
        'title': notification.title,
        'message': notification.message,
        'type': notification.type,
        'status': notification.status,
        'related_entity_type': notification.related_entity_type,
        'related_entity_id': notification.related_entity_id,
        'created_at': format_datetime(notification.created_at),
    }


def visible_to(user):
    return Notifications.objects.filter(Q(user=user) | Q(user__isnull=True))


def get_notifications(user):
    return [serialize_notification(n) for n in visible_to(user)]


def create_notification(data, user=None):
    notification = Notifications.objects.create(
        user=user,
        title=validate_required_field(data.get('title'), 'Title'),
        message=validate_required_field(data.get('message'), 'Message'),
        type=validate_choice(data.get('type', 'info'), Notifications.TYPE_CHOICES, 'type'),
        status=validate_choice(data.get('status', 'unread'), Notifications.STATUS_CHOICES, 'status'),
        related_entity_type=validate_optional_text(
            data.get('related_entity_type'), 'Related entity type', max_length=50
        ),
        related_entity_id=validate_id(data.get('related_entity_id'), 'Related entity id'),
    )
    return serialize_notification(notification)


def mark_read(notification_pk, user):
    notification = visible_to(user).get(notification_pk=notification_pk)
    notification.status = 'read'
    notification.save(update_fields=['status', 'updated_at'])
    return serialize_notification(notification)


def mark_all_read(user):
    """Returns the number of notifications changed."""
    return visible_to(user).filter(status='unread').update(status='read', updated_at=timezone.now())


def delete_notification(notification_pk, user):
    deleted, _ = visible_to(user).filter(notification_pk=notification_pk).delete()
    return deleted > 0


def get_unread_count(user):
    return visible_to(user).filter(status='unread').count()
