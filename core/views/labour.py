"""
Labour and labour group views
"""
import json
import logging
from django.core.exceptions import ValidationError
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from core.models import Labour, LabourGroups
from core.services import labour as labour_service
from core.utils import (
    api_login_required, parse_json_body, get_query_int, validation_message,
    error_response, success_response
)

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
def labour_groups_collection(request):
    """
    GET: list labour groups, optionally filtered by ?site_id=
    POST: create a labour group (group_name required)
    """
    if request.method == 'GET':
        groups = labour_service.get_labour_groups(get_query_int(request, 'site_id'))
        return success_response({'labour_groups': groups})

    try:
        group = labour_service.create_labour_group(parse_json_body(request))
        logger.info(f"Created labour group: {group['group_name']} (pk={group['group_pk']})")
        return success_response({'labour_group': group}, status=201)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error creating labour group: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
def labour_group_detail(request, group_pk):
    try:
        if request.method == 'GET':
            return success_response({'labour_group': labour_service.get_labour_group(group_pk)})

        if request.method == 'DELETE':
            if not labour_service.delete_labour_group(group_pk):
                return error_response('Labour group not found', status=404)
            return success_response(message='Labour group deleted successfully')

        group = labour_service.update_labour_group(group_pk, parse_json_body(request))
        return success_response({'labour_group': group})

    except LabourGroups.DoesNotExist:
        return error_response('Labour group not found', status=404)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error handling labour group {group_pk}: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
def labour_collection(request):
    """
    GET: list labourers, optionally filtered by ?site_id=
    POST: create a labourer (full_name and labour_type required)
    """
    if request.method == 'GET':
        return success_response({'labour': labour_service.get_labour(get_query_int(request, 'site_id'))})

    try:
        labour = labour_service.create_labour(parse_json_body(request), user=request.user)
        logger.info(f"Created labour: {labour['full_name']} (pk={labour['labour_pk']})")
        return success_response({'labour': labour}, status=201)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error creating labour: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
def labour_detail(request, labour_pk):
    try:
        if request.method == 'GET':
            return success_response({'labour': labour_service.get_labour_by_id(labour_pk)})

        if request.method == 'DELETE':
            if not labour_service.delete_labour(labour_pk):
                return error_response('Labour not found', status=404)
            return success_response(message='Labour deleted successfully')

        labour = labour_service.update_labour(labour_pk, parse_json_body(request))
        return success_response({'labour': labour})

    except Labour.DoesNotExist:
        return error_response('Labour not found', status=404)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error handling labour {labour_pk}: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)
