"""
Dashboard app views.

Response Helpers (from core.utils):
- error_response(message, status) - Standardized error JSON response
- success_response(payload, status, message) - Standardized success JSON response

Dashboard Views:
1. dashboard_metrics - Active sites, active labour, this month's purchase spend, unpaid invoices
2. recent_sites - Latest sites
3. recent_purchases - Latest purchases (without product lines)
4. pending_wages - Wage records with payment_type 'pending'
5. labour_team_summary - Per labour group member count and invoiced totals

Every view accepts ?limit= where a list is returned (default 5, max 50).

Dependencies:
- Services: core.services.aggregations, core.services.sites, core.services.purchases,
  core.services.salaries
"""

import logging
from django.views.decorators.http import require_http_methods
from core.services.aggregations import calculate_dashboard_metrics, get_labour_team_summary
from core.services.purchases import get_recent_purchases
from core.services.salaries import get_pending_wages
from core.services.sites import get_recent_sites
from core.utils import api_login_required, get_query_int, error_response, success_response

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
MAX_LIMIT = 50


def _limit(request):
    limit = get_query_int(request, 'limit') or DEFAULT_LIMIT
    return max(1, min(limit, MAX_LIMIT))


@require_http_methods(["GET"])
@api_login_required
def dashboard_metrics(request):
    try:
        return success_response({'metrics': calculate_dashboard_metrics()})
    except Exception as e:
        logger.error(f"Error calculating dashboard metrics: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)


@require_http_methods(["GET"])
@api_login_required
def recent_sites(request):
    return success_response({'sites': get_recent_sites(_limit(request))})


@require_http_methods(["GET"])
@api_login_required
def recent_purchases(request):
    return success_response({'purchases': get_recent_purchases(_limit(request))})


@require_http_methods(["GET"])
@api_login_required
def pending_wages(request):
    return success_response({'salaries': get_pending_wages(_limit(request))})


@require_http_methods(["GET"])
@api_login_required
def labour_team_summary(request):
    try:
        return success_response({'labour_groups': get_labour_team_summary()})
    except Exception as e:
        logger.error(f"Error building labour team summary: {str(e)}", exc_info=True)
        return error_response(f'Unexpected error: {str(e)}', status=500)
