"""
Unit tests for invoice service functions.

Tests the business logic in core/services/invoices.py independently of views.
"""

from django.test import TestCase
from django.core.exceptions import ValidationError
from django.contrib.auth.models import User
from decimal import Decimal
from datetime import date
from core.models import Sites, LabourGroups, Labour, Invoices, InvoiceLabourDetail
from core.services import invoices as invoice_service


class InvoiceServiceTestCase(TestCase):
    """Base test case with common fixtures for invoice service tests."""

    def setUp(self):
        self.user = User.objects.create_user(username='manager', password='pass')
        self.site = Sites.objects.create(site_name='Downtown Plaza', status='on_progress')
        self.group = LabourGroups.objects.create(group_name='Masons', site=self.site)
        self.labour1 = Labour.objects.create(
            full_name='Ravi Kumar', labour_type='hire_worker', site=self.site, labour_group=self.group,
            daily_wage=Decimal('800.00')
        )
        self.labour2 = Labour.objects.create(
            full_name='Sunil Das', labour_type='subcontractor_labour', site=self.site, labour_group=self.group
        )

        self.invoice_data = {
            'invoice_number': 'INV-001',
            'site_id': self.site.site_pk,
            'invoice_date': '2024-03-15',
            'payment_status': 'credit',
            'labour_details': [
                {
                    'labour_id': self.labour1.labour_pk,
                    'labour_group_id': self.group.group_pk,
                    'piecework_payment': 100,
                    'daily_wage': 50,
                    'advance_payment': 20,
                    'refund': 0,
                    'sign': 'RK',
                },
                {
                    'labour_id': self.labour2.labour_pk,
                    'piecework_payment': '30',
                    'daily_wage': '',
                    'advance_payment': None,
                    'refund': '10',
                },
            ],
        }


class CreateInvoiceTests(InvoiceServiceTestCase):
    """Tests for create_invoice function."""

    def test_create_invoice_with_details(self):
        invoice = invoice_service.create_invoice(self.invoice_data, user=self.user)

        self.assertEqual(invoice['invoice_number'], 'INV-001')
        self.assertEqual(invoice['invoice_date'], '2024-03-15')
        self.assertEqual(len(invoice['labour_details']), 2)
        self.assertEqual(invoice['total_piecework'], 130.0)
        self.assertEqual(invoice['total_daily_wage'], 50.0)
        self.assertEqual(invoice['total_advance_payment'], 20.0)
        self.assertEqual(invoice['total_refund'], 10.0)
        self.assertEqual(invoice['grand_total'], 170.0)

    def test_stored_totals_match_details(self):
        invoice = invoice_service.create_invoice(self.invoice_data, user=self.user)
        stored = Invoices.objects.get(invoice_pk=invoice['invoice_pk'])

        self.assertEqual(stored.total_piecework, Decimal('130.00'))
        self.assertEqual(stored.grand_total, Decimal('170.00'))
        self.assertEqual(stored.recorded_by, self.user)

    def test_client_totals_are_ignored(self):
        self.invoice_data['grand_total'] = 99999
        self.invoice_data['total_piecework'] = 1
        invoice = invoice_service.create_invoice(self.invoice_data)
        self.assertEqual(invoice['grand_total'], 170.0)
        self.assertEqual(invoice['total_piecework'], 130.0)

    def test_create_invoice_without_details(self):
        invoice = invoice_service.create_invoice({'invoice_number': 'INV-EMPTY'})
        self.assertEqual(invoice['labour_details'], [])
        self.assertEqual(invoice['grand_total'], 0.0)
        self.assertEqual(invoice['payment_status'], 'credit')

    def test_duplicate_invoice_number_rejected(self):
        invoice_service.create_invoice(self.invoice_data)
        with self.assertRaises(ValidationError) as ctx:
            invoice_service.create_invoice({'invoice_number': 'INV-001'})
        self.assertIn('Invoice number INV-001 already exists', ctx.exception.messages)

    def test_missing_invoice_number_rejected(self):
        with self.assertRaises(ValidationError):
            invoice_service.create_invoice({'labour_details': []})

    def test_negative_amount_rejected(self):
        self.invoice_data['labour_details'][0]['advance_payment'] = -5
        with self.assertRaises(ValidationError) as ctx:
            invoice_service.create_invoice(self.invoice_data)
        self.assertIn('cannot be negative', ctx.exception.messages[0])
        self.assertFalse(Invoices.objects.filter(invoice_number='INV-001').exists())

    def test_unknown_labour_rejected(self):
        self.invoice_data['labour_details'][0]['labour_id'] = 9999
        with self.assertRaises(ValidationError):
            invoice_service.create_invoice(self.invoice_data)

    def test_invalid_payment_status_rejected(self):
        self.invoice_data['payment_status'] = 'overdue'
        with self.assertRaises(ValidationError):
            invoice_service.create_invoice(self.invoice_data)


class UpdateInvoiceTests(InvoiceServiceTestCase):
    """Tests for update_invoice function."""

    def setUp(self):
        super().setUp()
        self.invoice = invoice_service.create_invoice(self.invoice_data, user=self.user)
        self.invoice_pk = self.invoice['invoice_pk']

    def test_update_fields_only_keeps_details(self):
        invoice = invoice_service.update_invoice(self.invoice_pk, {'payment_status': 'paid'})
        self.assertEqual(invoice['payment_status'], 'paid')
        self.assertEqual(len(invoice['labour_details']), 2)
        self.assertEqual(invoice['grand_total'], 170.0)

    def test_update_replaces_detail_set(self):
        first = self.invoice['labour_details'][0]
        invoice = invoice_service.update_invoice(self.invoice_pk, {
            'labour_details': [
                {**first, 'piecework_payment': 200},
                {'labour_id': self.labour2.labour_pk, 'daily_wage': 75},
            ]
        })

        self.assertEqual(len(invoice['labour_details']), 2)
        self.assertEqual(invoice['labour_details'][0]['detail_pk'], first['detail_pk'])
        self.assertEqual(invoice['total_piecework'], 200.0)
        self.assertEqual(invoice['total_daily_wage'], 125.0)
        self.assertEqual(invoice['total_refund'], 0.0)
        self.assertEqual(invoice['grand_total'], 305.0)
        self.assertEqual(Invoices.objects.get(invoice_pk=self.invoice_pk).grand_total, Decimal('305.00'))
        self.assertEqual(InvoiceLabourDetail.objects.filter(invoice_id=self.invoice_pk).count(), 2)

    def test_update_with_foreign_detail_rejected(self):
        other = invoice_service.create_invoice({
            'invoice_number': 'INV-002',
            'labour_details': [{'piecework_payment': 1}],
        })
        foreign_pk = other['labour_details'][0]['detail_pk']
        with self.assertRaises(ValidationError):
            invoice_service.update_invoice(self.invoice_pk, {
                'labour_details': [{'detail_pk': foreign_pk, 'piecework_payment': 5}]
            })

    def test_update_can_keep_own_invoice_number(self):
        invoice = invoice_service.update_invoice(self.invoice_pk, {'invoice_number': 'INV-001'})
        self.assertEqual(invoice['invoice_number'], 'INV-001')

    def test_update_missing_invoice(self):
        with self.assertRaises(Invoices.DoesNotExist):
            invoice_service.update_invoice(9999, {'payment_status': 'paid'})


class LabourDetailTests(InvoiceServiceTestCase):
    """Tests for the single labour detail operations."""

    def setUp(self):
        super().setUp()
        self.invoice = invoice_service.create_invoice(self.invoice_data)
        self.invoice_pk = self.invoice['invoice_pk']

    def test_add_labour_detail_resyncs_totals(self):
        result = invoice_service.add_labour_detail({
            'invoice_id': self.invoice_pk,
            'labour_id': self.labour1.labour_pk,
            'piecework_payment': '10',
            'daily_wage': '5',
            'advance_payment': '2',
            'refund': '1',
        })

        self.assertEqual(result['labour_detail']['invoice_id'], self.invoice_pk)
        self.assertEqual(result['totals']['total_piecework'], 140.0)
        self.assertEqual(result['totals']['grand_total'], 184.0)
        self.assertEqual(Invoices.objects.get(invoice_pk=self.invoice_pk).grand_total, Decimal('184.00'))

    def test_add_labour_detail_requires_invoice(self):
        with self.assertRaises(ValidationError):
            invoice_service.add_labour_detail({'piecework_payment': 10})

    def test_add_labour_detail_missing_invoice(self):
        with self.assertRaises(Invoices.DoesNotExist):
            invoice_service.add_labour_detail({'invoice_id': 9999, 'piecework_payment': 10})

    def test_update_labour_detail_resyncs_totals(self):
        detail_pk = self.invoice['labour_details'][1]['detail_pk']
        result = invoice_service.update_labour_detail(detail_pk, {'refund': 0})

        self.assertEqual(result['labour_detail']['refund'], 0.0)
        self.assertEqual(result['labour_detail']['piecework_payment'], 30.0)
        self.assertEqual(result['totals']['grand_total'], 160.0)
        self.assertEqual(Invoices.objects.get(invoice_pk=self.invoice_pk).total_refund, Decimal('0.00'))

    def test_remove_labour_detail_resyncs_totals(self):
        detail_pk = self.invoice['labour_details'][0]['detail_pk']
        result = invoice_service.remove_labour_detail(detail_pk)

        self.assertEqual(result['invoice_id'], self.invoice_pk)
        self.assertEqual(result['totals']['total_piecework'], 30.0)
        self.assertEqual(result['totals']['grand_total'], 40.0)
        self.assertFalse(InvoiceLabourDetail.objects.filter(detail_pk=detail_pk).exists())

    def test_remove_missing_labour_detail(self):
        with self.assertRaises(InvoiceLabourDetail.DoesNotExist):
            invoice_service.remove_labour_detail(9999)

    def test_get_invoice_labour_details(self):
        details = invoice_service.get_invoice_labour_details(self.invoice_pk)
        self.assertEqual([d['piecework_payment'] for d in details], [100.0, 30.0])


class RecomputeInvoiceTotalsTests(InvoiceServiceTestCase):
    """Totals edited outside the service layer are repaired on read and by recompute."""

    def setUp(self):
        super().setUp()
        self.invoice = invoice_service.create_invoice(self.invoice_data)
        self.invoice_pk = self.invoice['invoice_pk']
        # Simulate a direct database edit that bypasses the service layer
        InvoiceLabourDetail.objects.filter(invoice_id=self.invoice_pk, refund=Decimal('10')).update(
            refund=Decimal('60')
        )

    def test_read_recomputes_from_details(self):
        invoice = invoice_service.get_invoice(self.invoice_pk)
        self.assertEqual(invoice['total_refund'], 60.0)
        self.assertEqual(invoice['grand_total'], 220.0)

    def test_dry_run_reports_without_saving(self):
        changed = invoice_service.recompute_invoice_totals(dry_run=True)
        self.assertEqual(len(changed), 1)
        self.assertEqual(changed[0]['stored']['grand_total'], 170.0)
        self.assertEqual(changed[0]['recomputed']['grand_total'], 220.0)
        self.assertEqual(Invoices.objects.get(invoice_pk=self.invoice_pk).grand_total, Decimal('170.00'))

    def test_recompute_saves_and_is_idempotent(self):
        changed = invoice_service.recompute_invoice_totals()
        self.assertEqual(len(changed), 1)
        self.assertEqual(Invoices.objects.get(invoice_pk=self.invoice_pk).grand_total, Decimal('220.00'))
        self.assertEqual(invoice_service.recompute_invoice_totals(), [])

    def test_recompute_limited_to_given_invoices(self):
        other = invoice_service.create_invoice({'invoice_number': 'INV-002'})
        changed = invoice_service.recompute_invoice_totals(invoice_pks=[other['invoice_pk']])
        self.assertEqual(changed, [])


class PendingInvoiceCountTests(InvoiceServiceTestCase):

    def test_counts_credit_invoices(self):
        invoice_service.create_invoice({'invoice_number': 'A', 'payment_status': 'credit'})
        invoice_service.create_invoice({'invoice_number': 'B', 'payment_status': 'paid'})
        invoice_service.create_invoice({'invoice_number': 'C'})
        self.assertEqual(invoice_service.get_pending_invoice_count(), 2)

    def test_invoice_ordering_newest_first(self):
        invoice_service.create_invoice({'invoice_number': 'A', 'invoice_date': date(2024, 1, 1)})
        invoice_service.create_invoice({'invoice_number': 'B'})
        numbers = [i['invoice_number'] for i in invoice_service.get_invoices()]
        self.assertEqual(numbers, ['B', 'A'])
