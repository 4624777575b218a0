import json
import logging
from django.core.exceptions import ValidationError
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from core.models import Attendance
from core.services import attendance as attendance_service
from core.utils import (
    api_login_required, parse_json_body, get_query_int, validation_message,
    error_response, success_response
)
from core.validators import validate_date

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
def attendance_collection(request):
    """
    GET: attendance entries filtered by ?site_id=, ?labour_id= and ?date=YYYY-MM-DD
    POST: record attendance for one labourer on one day
    """
    try:
        if request.method == 'GET':
            entries = attendance_service.get_attendance(
                site_pk=get_query_int(request, 'site_id'),
                labour_pk=get_query_int(request, 'labour_id'),
                on_date=validate_date(request.GET.get('date'), 'date'),
            )
            return success_response({'attendance': entries})

        entry = attendance_service.create_attendance(parse_json_body(request), user=request.user)
        return success_response({'attendance': entry}, status=201)

    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error handling attendance: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@csrf_exempt
@require_http_methods(["PUT", "DELETE"])
@api_login_required
def attendance_detail(request, attendance_pk):
    try:
        if request.method == 'DELETE':
            if not attendance_service.delete_attendance(attendance_pk):
                return error_response('Attendance not found', status=404)
            return success_response(message='Attendance deleted successfully')

        entry = attendance_service.update_attendance(attendance_pk, parse_json_body(request))
        return success_response({'attendance': entry})

    except Attendance.DoesNotExist:
        return error_response('Attendance not found', status=404)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error handling attendance {attendance_pk}: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)
