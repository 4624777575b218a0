"""
Site management views
"""
import json
import logging
from django.core.exceptions import ValidationError
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from core.models import Sites
from core.services import sites as site_service
from core.utils import (
    api_login_required, parse_json_body, validation_message, error_response, success_response
)

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
def sites_collection(request):
    """
    GET: list all sites, newest first.
    POST: create a site.

    Expected POST data (JSON):
    - site_name: str (required)
    - location, start_date, end_date, budget, status: optional
    """
    if request.method == 'GET':
        return success_response({'sites': site_service.get_sites()})

    try:
        data = parse_json_body(request)
        site = site_service.create_site(data, user=request.user)
        logger.info(f"Created site: {site['site_name']} (pk={site['site_pk']})")
        return success_response({'site': site}, status=201)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error creating site: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
def site_detail(request, site_pk):
    try:
        if request.method == 'GET':
            return success_response({'site': site_service.get_site(site_pk)})

        if request.method == 'DELETE':
            if not site_service.delete_site(site_pk):
                return error_response('Site not found', status=404)
            logger.info(f"Deleted site pk={site_pk}")
            return success_response(message='Site deleted successfully')

        data = parse_json_body(request)
        return success_response({'site': site_service.update_site(site_pk, data)})

    except Sites.DoesNotExist:
        return error_response('Site not found', status=404)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error handling site {site_pk}: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)
