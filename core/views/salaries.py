"""
Salary (wage record) views
"""
import json
import logging
from django.core.exceptions import ValidationError
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from core.models import Salaries
from core.services import salaries as salary_service
from core.utils import (
    api_login_required, parse_json_body, get_query_int, validation_message,
    error_response, success_response
)

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
def salaries_collection(request):
    """
    GET: list wage records, optionally filtered by ?site_id= and ?labour_id=
    POST: record a wage entry
    """
    if request.method == 'GET':
        salaries = salary_service.get_salaries(
            get_query_int(request, 'site_id'), get_query_int(request, 'labour_id')
        )
        return success_response({'salaries': salaries})

    try:
        salary = salary_service.create_salary(parse_json_body(request), user=request.user)
        logger.info(f"Recorded wage {salary['salary_pk']} for labour {salary['labour_id']}")
        return success_response({'salary': salary}, status=201)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error creating salary: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
def salary_detail(request, salary_pk):
    try:
        if request.method == 'GET':
            return success_response({'salary': salary_service.get_salary(salary_pk)})

        if request.method == 'DELETE':
            if not salary_service.delete_salary(salary_pk):
                return error_response('Salary not found', status=404)
            return success_response(message='Salary deleted successfully')

        salary = salary_service.update_salary(salary_pk, parse_json_body(request))
        return success_response({'salary': salary})

    except Salaries.DoesNotExist:
        return error_response('Salary not found', status=404)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error handling salary {salary_pk}: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@require_http_methods(["GET"])
@api_login_required
def salary_summary(request):
    """Totals across the wage records matching ?site_id= and ?labour_id="""
    summary = salary_service.get_wage_summary(
        get_query_int(request, 'site_id'), get_query_int(request, 'labour_id')
    )
    return success_response(summary)
