"""
Tests for the core management commands.
"""

import os
import shutil
import tempfile
from io import StringIO
from decimal import Decimal
from unittest import mock
from django.core.management import call_command
from django.core.management.base import CommandError
from django.contrib.auth.models import User
from django.test import TestCase
from core.models import Invoices, InvoiceLabourDetail, Notifications


class RecomputeInvoiceTotalsCommandTests(TestCase):

    def setUp(self):
        self.invoice = Invoices.objects.create(invoice_number='INV-001', grand_total=Decimal('10.00'))
        InvoiceLabourDetail.objects.create(
            invoice=self.invoice, piecework_payment=Decimal('100.00'), advance_payment=Decimal('20.00')
        )
        self.in_sync = Invoices.objects.create(invoice_number='INV-002')

    def test_dry_run(self):
        out = StringIO()
        call_command('recompute_invoice_totals', '--dry-run', stdout=out)
        self.assertIn('INV-001', out.getvalue())
        self.assertIn('dry run', out.getvalue())
        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.grand_total, Decimal('10.00'))

    def test_recompute_all(self):
        out = StringIO()
        call_command('recompute_invoice_totals', stdout=out)
        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.total_piecework, Decimal('100.00'))
        self.assertEqual(self.invoice.grand_total, Decimal('80.00'))
        self.assertIn('Updated totals on 1 invoices', out.getvalue())

    def test_single_invoice(self):
        out = StringIO()
        call_command('recompute_invoice_totals', '--invoice', str(self.in_sync.invoice_pk), stdout=out)
        self.assertIn('up to date', out.getvalue())
        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.grand_total, Decimal('10.00'))


class SeedNotificationsCommandTests(TestCase):

    def test_seeds_shared_notifications_once(self):
        call_command('seed_notifications', stdout=StringIO())
        self.assertEqual(Notifications.objects.filter(user__isnull=True).count(), 5)
        call_command('seed_notifications', stdout=StringIO())
        self.assertEqual(Notifications.objects.count(), 5)

    def test_seeds_for_user(self):
        user = User.objects.create_user(username='manager', password='pass')
        call_command('seed_notifications', '--username', 'manager', stdout=StringIO())
        self.assertEqual(Notifications.objects.filter(user=user).count(), 5)
        self.assertEqual(Notifications.objects.filter(user=user, status='read').count(), 1)

    def test_unknown_user(self):
        with self.assertRaises(CommandError):
            call_command('seed_notifications', '--username', 'nobody', stdout=StringIO())


class CreateSuperuserCommandTests(TestCase):

    @mock.patch.dict(os.environ, {'SUPERUSER_USERNAME': 'boss', 'SUPERUSER_PASSWORD': 's3cret-pass'})
    def test_creates_then_updates_password(self):
        call_command('create_superuser_if_not_exists', stdout=StringIO())
        user = User.objects.get(username='boss')
        self.assertTrue(user.is_superuser)

        with mock.patch.dict(os.environ, {'SUPERUSER_PASSWORD': 'changed-pass'}):
            out = StringIO()
            call_command('create_superuser_if_not_exists', stdout=out)
        user.refresh_from_db()
        self.assertTrue(user.check_password('changed-pass'))
        self.assertIn('password updated', out.getvalue())

    def test_requires_password(self):
        env = {k: v for k, v in os.environ.items() if k != 'SUPERUSER_PASSWORD'}
        with mock.patch.dict(os.environ, env, clear=True):
            with self.assertRaises(CommandError):
                call_command('create_superuser_if_not_exists', stdout=StringIO())


class CheckReceiptStorageCommandTests(TestCase):

    def setUp(self):
        self.media_root = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.media_root, ignore_errors=True)

    def test_round_trip(self):
        out = StringIO()
        with self.settings(MEDIA_ROOT=self.media_root):
            call_command('check_receipt_storage', stdout=out)
        self.assertIn('Receipt storage OK', out.getvalue())
        self.assertIn('purchase_receipts/storage_check', out.getvalue())
        self.assertEqual(os.listdir(os.path.join(self.media_root, 'purchase_receipts')), [])
