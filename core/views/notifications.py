"""
Notification views. Every query is scoped to notifications visible to
the requesting user.
"""
import json
import logging
from django.core.exceptions import ValidationError
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from core.models import Notifications
from core.services import notifications as notification_service
from core.utils import (
    api_login_required, parse_json_body, validation_message, error_response, success_response
)

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
def notifications_collection(request):
    if request.method == 'GET':
        return success_response({
            'notifications': notification_service.get_notifications(request.user),
            'unread_count': notification_service.get_unread_count(request.user),
        })

    try:
        notification = notification_service.create_notification(parse_json_body(request), user=request.user)
        return success_response({'notification': notification}, status=201)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error creating notification: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@csrf_exempt
@require_http_methods(["PATCH"])
@api_login_required
def mark_notification_read(request, notification_pk):
    try:
        notification = notification_service.mark_read(notification_pk, request.user)
        return success_response({'notification': notification})
    except Notifications.DoesNotExist:
        return error_response('Notification not found', status=404)


@csrf_exempt
@require_http_methods(["PATCH"])
@api_login_required
def mark_all_notifications_read(request):
    updated = notification_service.mark_all_read(request.user)
    return success_response({'updated': updated}, message='All notifications marked as read')


@csrf_exempt
@require_http_methods(["DELETE"])
@api_login_required
def delete_notification(request, notification_pk):
    if not notification_service.delete_notification(notification_pk, request.user):
        return error_response('Notification not found', status=404)
    return success_response(message='Notification deleted successfully')
