"""
Aggregations service module.

Contains business logic for dashboard aggregations and totals that operate
across multiple service domains.

Models used: Sites, Labour, LabourGroups, Purchases, Invoices
"""

from decimal import Decimal
from django.db.models import Count, Sum
from django.utils import timezone
from ..models import Sites, Labour, LabourGroups, Purchases, InvoiceLabourDetail
from .invoices import get_pending_invoice_count
from .totals import recompute, totals_as_json


def get_monthly_expenses(today=None):
    """
    Sum of purchase totals recorded in the current calendar month.

    Returns:
        Decimal: Total purchase spend for the month
    """
    today = today or timezone.localdate()
    total = Purchases.objects.filter(
        created_at__year=today.year,
        created_at__month=today.month
    ).aggregate(total=Sum('total_amount'))['total']
    return total or Decimal('0.00')


def calculate_dashboard_metrics():
    """
    Calculate headline dashboard metrics.

    Returns:
        dict: active_sites, total_labour, monthly_expenses, pending_invoices
    """
    return {
        'active_sites': Sites.objects.filter(status='on_progress').count(),
        'total_labour': Labour.objects.filter(status='active').count(),
        'monthly_expenses': float(get_monthly_expenses()),
        'pending_invoices': get_pending_invoice_count(),
    }


def get_labour_team_summary():
    """
    Summarise each labour group: member count and invoiced totals.

    Invoiced totals are recomputed from the group's invoice labour details,
    never read from the stored invoice totals.

    Returns:
        list: One dict per group, largest grand_total first
    """
    groups = LabourGroups.objects.annotate(member_count=Count('members'))
    details_by_group = {}
    for detail in InvoiceLabourDetail.objects.filter(labour_group__isnull=False):
        details_by_group.setdefault(detail.labour_group_id, []).append(detail)

    summary = []
    for group in groups:
        details = details_by_group.get(group.group_pk, [])
        summary.append({
            'group_pk': group.group_pk,
            'group_name': group.group_name,
            'site_id': group.site_id,
            'member_count': group.member_count,
            'invoice_line_count': len(details),
            **totals_as_json(recompute(details)),
        })

    summary.sort(key=lambda g: g['grand_total'], reverse=True)
    return summary
