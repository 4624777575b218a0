"""
Purchase views, including receipt uploads.
"""
import json
import logging
from django.core.exceptions import ValidationError
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from core.models import Purchases
from core.services import purchases as purchase_service
from core.utils import (
    api_login_required, parse_json_body, get_query_int, validation_message,
    error_response, success_response
)

logger = logging.getLogger(__name__)

ALLOWED_RECEIPT_EXTENSIONS = ['pdf', 'jpg', 'jpeg', 'png']


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
def purchases_collection(request):
    """
    GET: list purchases, optionally filtered by ?site_id=
    POST: create a purchase.

    Expected POST data (JSON):
    - site_id, purchase_date, invoice_number_or_img, item_description: optional
    - products: list of {name, quantity, units, unit_price}; the line totals
      and the purchase total_amount are calculated server-side
    - total_amount: only used when no products are sent
    """
    if request.method == 'GET':
        return success_response({'purchases': purchase_service.get_purchases(get_query_int(request, 'site_id'))})

    try:
        purchase = purchase_service.create_purchase(parse_json_body(request), user=request.user)
        return success_response({'purchase': purchase}, status=201)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error creating purchase: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
def purchase_detail(request, purchase_pk):
    try:
        if request.method == 'GET':
            return success_response({'purchase': purchase_service.get_purchase(purchase_pk)})

        if request.method == 'DELETE':
            if not purchase_service.delete_purchase(purchase_pk):
                return error_response('Purchase not found', status=404)
            return success_response(message='Purchase deleted successfully')

        purchase = purchase_service.update_purchase(purchase_pk, parse_json_body(request))
        return success_response({'purchase': purchase})

    except Purchases.DoesNotExist:
        return error_response('Purchase not found', status=404)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error handling purchase {purchase_pk}: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@csrf_exempt
@require_http_methods(["POST"])
@api_login_required
def upload_purchase_receipt(request, purchase_pk):
    """
    Attach a receipt file to a purchase (multipart field 'receipt').
    """
    if 'receipt' not in request.FILES:
        return error_response('No receipt file provided')

    receipt = request.FILES['receipt']
    file_ext = receipt.name.split('.')[-1].lower()
    if file_ext not in ALLOWED_RECEIPT_EXTENSIONS:
        return error_response(f'Invalid file type. Allowed: {", ".join(ALLOWED_RECEIPT_EXTENSIONS)}')

    try:
        purchase = purchase_service.attach_receipt(purchase_pk, receipt)
        return success_response({'purchase': purchase})
    except Purchases.DoesNotExist:
        return error_response('Purchase not found', status=404)
    except Exception as e:
        logger.error(f"Error uploading receipt for purchase {purchase_pk}: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)
