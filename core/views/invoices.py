"""
Invoice and invoice labour detail views.

Invoice totals are always derived server-side from the labour details;
any totals sent by the client are ignored.
"""
import json
import logging
from django.core.exceptions import ValidationError
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from core.models import Invoices, InvoiceLabourDetail
from core.services import invoices as invoice_service
from core.utils import (
    api_login_required, parse_json_body, get_query_int, validation_message,
    error_response, success_response
)
from core.validators import validate_id

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
def invoices_collection(request):
    """
    GET: list invoices with recomputed totals, optionally filtered by ?site_id=
    POST: create an invoice.

    Expected POST data (JSON):
    - invoice_number: str (required, unique)
    - site_id, invoice_date, payment_status: optional
    - labour_details: list of {labour_id, labour_group_id, piecework_payment,
      daily_wage, advance_payment, refund, sign}
    """
    if request.method == 'GET':
        return success_response({'invoices': invoice_service.get_invoices(get_query_int(request, 'site_id'))})

    try:
        invoice = invoice_service.create_invoice(parse_json_body(request), user=request.user)
        return success_response({'invoice': invoice}, status=201)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error creating invoice: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_login_required
def invoice_detail(request, invoice_pk):
    try:
        if request.method == 'GET':
            return success_response({'invoice': invoice_service.get_invoice(invoice_pk)})

        if request.method == 'DELETE':
            if not invoice_service.delete_invoice(invoice_pk):
                return error_response('Invoice not found', status=404)
            logger.info(f"Deleted invoice pk={invoice_pk}")
            return success_response(message='Invoice deleted successfully')

        invoice = invoice_service.update_invoice(invoice_pk, parse_json_body(request))
        return success_response({'invoice': invoice})

    except Invoices.DoesNotExist:
        return error_response('Invoice not found', status=404)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error handling invoice {invoice_pk}: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@csrf_exempt
@require_http_methods(["POST"])
@api_login_required
def recompute_invoices(request):
    """
    Re-derive stored invoice totals from their labour details.

    Expected POST data (JSON, optional):
    - invoice_ids: list of invoice ids (default: all)
    - dry_run: bool
    """
    try:
        data = parse_json_body(request)
        invoice_ids = data.get('invoice_ids') or None
        if invoice_ids is not None:
            if not isinstance(invoice_ids, list):
                return error_response('invoice_ids must be a list')
            invoice_ids = [validate_id(pk, 'Invoice id') for pk in invoice_ids]
            if None in invoice_ids:
                return error_response('invoice_ids must contain integer ids')
        changed = invoice_service.recompute_invoice_totals(
            invoice_pks=invoice_ids, dry_run=bool(data.get('dry_run'))
        )
        return success_response({'changed': changed, 'count': len(changed)})
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error recomputing invoice totals: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@require_http_methods(["GET"])
@api_login_required
def invoice_labour_details(request, invoice_pk):
    if not Invoices.objects.filter(invoice_pk=invoice_pk).exists():
        return error_response('Invoice not found', status=404)
    details = invoice_service.get_invoice_labour_details(invoice_pk)
    return success_response({'labour_details': details})


@csrf_exempt
@require_http_methods(["POST"])
@api_login_required
def create_invoice_labour_detail(request):
    """
    Add a labour detail to an invoice (invoice_id required in the body).
    Returns the new detail and the invoice's updated totals.
    """
    try:
        result = invoice_service.add_labour_detail(parse_json_body(request))
        return success_response(result, status=201)
    except Invoices.DoesNotExist:
        return error_response('Invoice not found', status=404)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error adding invoice labour detail: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@csrf_exempt
@require_http_methods(["PUT", "DELETE"])
@api_login_required
def invoice_labour_detail_item(request, detail_pk):
    try:
        if request.method == 'DELETE':
            result = invoice_service.remove_labour_detail(detail_pk)
            return success_response(result, message='Labour detail deleted successfully')

        result = invoice_service.update_labour_detail(detail_pk, parse_json_body(request))
        return success_response(result)

    except (InvoiceLabourDetail.DoesNotExist, Invoices.DoesNotExist):
        return error_response('Labour detail not found', status=404)
    except json.JSONDecodeError:
        return error_response('Invalid JSON data')
    except ValidationError as e:
        return error_response(validation_message(e))
    except Exception as e:
        logger.error(f"Error handling labour detail {detail_pk}: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)
