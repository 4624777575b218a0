"""
Tests for the dashboard aggregate views and services.
"""

from datetime import date, timedelta
from decimal import Decimal
from django.contrib.auth.models import User
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from core.models import Sites, LabourGroups, Labour, Purchases, Salaries, Invoices, InvoiceLabourDetail
from core.services.aggregations import get_monthly_expenses, get_labour_team_summary


class DashboardTestCase(TestCase):
    """Base test case with a small construction business."""

    def setUp(self):
        self.user = User.objects.create_user(username='manager', password='pass')
        self.client.login(username='manager', password='pass')

        self.site = Sites.objects.create(site_name='Downtown Plaza', status='on_progress')
        Sites.objects.create(site_name='Riverside', status='on_hold')
        Sites.objects.create(site_name='Old Mill', status='completed')

        self.masons = LabourGroups.objects.create(group_name='Masons', site=self.site)
        self.carpenters = LabourGroups.objects.create(group_name='Carpenters', site=self.site)
        self.ravi = Labour.objects.create(full_name='Ravi', labour_type='hire_worker', labour_group=self.masons)
        Labour.objects.create(full_name='Sunil', labour_type='hire_worker', labour_group=self.masons)
        Labour.objects.create(
            full_name='Anil', labour_type='hire_worker', labour_group=self.carpenters, status='inactive'
        )

        Purchases.objects.create(site=self.site, total_amount=Decimal('1200.50'))
        Purchases.objects.create(site=self.site, total_amount=Decimal('300.00'))
        old = Purchases.objects.create(site=self.site, total_amount=Decimal('999.00'))
        Purchases.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=400))

        invoice = Invoices.objects.create(invoice_number='INV-001', payment_status='credit')
        Invoices.objects.create(invoice_number='INV-002', payment_status='paid')
        InvoiceLabourDetail.objects.create(
            invoice=invoice, labour=self.ravi, labour_group=self.masons,
            piecework_payment=Decimal('100'), daily_wage=Decimal('50'), advance_payment=Decimal('20')
        )
        InvoiceLabourDetail.objects.create(
            invoice=invoice, labour_group=self.carpenters, piecework_payment=Decimal('30'), refund=Decimal('10')
        )

        Salaries.objects.create(labour=self.ravi, payment_type='pending', daily_wage=Decimal('800'))
        Salaries.objects.create(labour=self.ravi, payment_type='daily', daily_wage=Decimal('800'))


class DashboardMetricsTests(DashboardTestCase):

    def test_metrics(self):
        response = self.client.get(reverse('dashboard:metrics'))
        self.assertEqual(response.status_code, 200)
        metrics = response.json()['metrics']
        self.assertEqual(metrics['active_sites'], 1)
        self.assertEqual(metrics['total_labour'], 2)
        self.assertEqual(metrics['monthly_expenses'], 1500.5)
        self.assertEqual(metrics['pending_invoices'], 1)

    def test_monthly_expenses_for_empty_month(self):
        self.assertEqual(get_monthly_expenses(today=date(2000, 1, 1)), Decimal('0.00'))

    def test_requires_login(self):
        self.client.logout()
        self.assertEqual(self.client.get(reverse('dashboard:metrics')).status_code, 401)


class RecentListTests(DashboardTestCase):

    def test_recent_sites_limit(self):
        response = self.client.get(reverse('dashboard:recent_sites'), {'limit': 2})
        self.assertEqual([s['site_name'] for s in response.json()['sites']], ['Old Mill', 'Riverside'])

    def test_recent_purchases_default_limit(self):
        response = self.client.get(reverse('dashboard:recent_purchases'))
        self.assertEqual(len(response.json()['purchases']), 3)

    def test_pending_wages(self):
        response = self.client.get(reverse('dashboard:pending_wages'))
        salaries = response.json()['salaries']
        self.assertEqual(len(salaries), 1)
        self.assertEqual(salaries[0]['payment_type'], 'pending')

    def test_post_not_allowed(self):
        self.assertEqual(self.client.post(reverse('dashboard:recent_sites')).status_code, 405)


class LabourTeamSummaryTests(DashboardTestCase):

    def test_summary_totals_per_group(self):
        summary = get_labour_team_summary()
        self.assertEqual([g['group_name'] for g in summary], ['Masons', 'Carpenters'])

        masons = summary[0]
        self.assertEqual(masons['member_count'], 2)
        self.assertEqual(masons['invoice_line_count'], 1)
        self.assertEqual(masons['grand_total'], 130.0)

        carpenters = summary[1]
        self.assertEqual(carpenters['member_count'], 1)
        self.assertEqual(carpenters['total_refund'], 10.0)
        self.assertEqual(carpenters['grand_total'], 40.0)

    def test_summary_view(self):
        response = self.client.get(reverse('dashboard:labour_team_summary'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()['labour_groups']), 2)
