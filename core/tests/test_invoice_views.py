"""
Integration tests for the invoice API views.
"""

import json
from decimal import Decimal
from django.test import TestCase
from django.urls import reverse
from django.contrib.auth.models import User
from core.models import Sites, Labour, Invoices, InvoiceLabourDetail


class InvoiceViewTestCase(TestCase):
    """Base test case with a logged-in user and one site."""

    def setUp(self):
        self.user = User.objects.create_user(username='manager', password='pass')
        self.client.login(username='manager', password='pass')
        self.site = Sites.objects.create(site_name='Downtown Plaza')
        self.labour = Labour.objects.create(full_name='Ravi Kumar', labour_type='hire_worker', site=self.site)

    def post_json(self, url, data):
        return self.client.post(url, data=json.dumps(data), content_type='application/json')

    def put_json(self, url, data):
        return self.client.put(url, data=json.dumps(data), content_type='application/json')

    def create_invoice(self, number='INV-001'):
        response = self.post_json(reverse('core:invoices'), {
            'invoice_number': number,
            'site_id': self.site.site_pk,
            'labour_details': [
                {'labour_id': self.labour.labour_pk, 'piecework_payment': 100, 'daily_wage': 50, 'advance_payment': 20},
                {'labour_id': self.labour.labour_pk, 'piecework_payment': 30, 'refund': 10},
            ],
        })
        self.assertEqual(response.status_code, 201)
        return response.json()['invoice']


class InvoiceCollectionTests(InvoiceViewTestCase):

    def test_create_invoice(self):
        invoice = self.create_invoice()
        self.assertEqual(invoice['grand_total'], 170.0)
        self.assertEqual(invoice['recorded_by_id'], self.user.pk)
        self.assertEqual(Invoices.objects.count(), 1)

    def test_list_invoices_filtered_by_site(self):
        self.create_invoice()
        other_site = Sites.objects.create(site_name='Riverside')
        self.post_json(reverse('core:invoices'), {'invoice_number': 'INV-002', 'site_id': other_site.site_pk})

        response = self.client.get(reverse('core:invoices'), {'site_id': self.site.site_pk})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['status'], 'success')
        self.assertEqual([i['invoice_number'] for i in data['invoices']], ['INV-001'])

    def test_duplicate_number_returns_400(self):
        self.create_invoice()
        response = self.post_json(reverse('core:invoices'), {'invoice_number': 'INV-001'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Invoice number INV-001 already exists')

    def test_invalid_json_returns_400(self):
        response = self.client.post(reverse('core:invoices'), data='{not json', content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'status': 'error', 'message': 'Invalid JSON data'})

    def test_undecodable_body_returns_400(self):
        response = self.client.post(
            reverse('core:invoices'), data=b'\xff\xfe{"a"\x00', content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'status': 'error', 'message': 'Invalid JSON data'})

    def test_json_array_body_returns_400(self):
        response = self.client.post(reverse('core:invoices'), data='[]', content_type='application/json')
        self.assertEqual(response.status_code, 400)

    def test_unauthenticated_returns_401(self):
        self.client.logout()
        response = self.client.get(reverse('core:invoices'))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['message'], 'Authentication required')

    def test_wrong_method_returns_405(self):
        response = self.client.delete(reverse('core:invoices'))
        self.assertEqual(response.status_code, 405)


class InvoiceDetailTests(InvoiceViewTestCase):

    def test_get_invoice(self):
        invoice = self.create_invoice()
        response = self.client.get(reverse('core:invoice_detail', args=[invoice['invoice_pk']]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()['invoice']['labour_details']), 2)

    def test_get_missing_invoice_returns_404(self):
        response = self.client.get(reverse('core:invoice_detail', args=[9999]))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['message'], 'Invoice not found')

    def test_update_invoice(self):
        invoice = self.create_invoice()
        response = self.put_json(reverse('core:invoice_detail', args=[invoice['invoice_pk']]), {
            'payment_status': 'paid',
            'grand_total': 1,
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['invoice']['payment_status'], 'paid')
        self.assertEqual(response.json()['invoice']['grand_total'], 170.0)

    def test_update_invoice_negative_amount_returns_400(self):
        invoice = self.create_invoice()
        response = self.put_json(reverse('core:invoice_detail', args=[invoice['invoice_pk']]), {
            'labour_details': [{'daily_wage': -1}],
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(Invoices.objects.get(invoice_pk=invoice['invoice_pk']).grand_total, Decimal('170.00'))

    def test_delete_invoice_cascades_details(self):
        invoice = self.create_invoice()
        response = self.client.delete(reverse('core:invoice_detail', args=[invoice['invoice_pk']]))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Invoices.objects.exists())
        self.assertFalse(InvoiceLabourDetail.objects.exists())

    def test_delete_missing_invoice_returns_404(self):
        response = self.client.delete(reverse('core:invoice_detail', args=[9999]))
        self.assertEqual(response.status_code, 404)


class InvoiceLabourDetailViewTests(InvoiceViewTestCase):

    def setUp(self):
        super().setUp()
        self.invoice = self.create_invoice()
        self.invoice_pk = self.invoice['invoice_pk']

    def test_list_details(self):
        response = self.client.get(reverse('core:invoice_labour_details', args=[self.invoice_pk]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()['labour_details']), 2)

    def test_list_details_missing_invoice(self):
        response = self.client.get(reverse('core:invoice_labour_details', args=[9999]))
        self.assertEqual(response.status_code, 404)

    def test_add_detail(self):
        response = self.post_json(reverse('core:create_invoice_labour_detail'), {
            'invoice_id': self.invoice_pk,
            'labour_id': self.labour.labour_pk,
            'daily_wage': '25.50',
        })
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['totals']['grand_total'], 195.5)

    def test_add_detail_missing_invoice_returns_404(self):
        response = self.post_json(reverse('core:create_invoice_labour_detail'), {'invoice_id': 9999})
        self.assertEqual(response.status_code, 404)

    def test_add_detail_without_invoice_returns_400(self):
        response = self.post_json(reverse('core:create_invoice_labour_detail'), {'daily_wage': 5})
        self.assertEqual(response.status_code, 400)

    def test_update_detail(self):
        detail_pk = self.invoice['labour_details'][0]['detail_pk']
        response = self.put_json(
            reverse('core:invoice_labour_detail_item', args=[detail_pk]), {'advance_payment': 0}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['totals']['grand_total'], 190.0)

    def test_delete_detail(self):
        detail_pk = self.invoice['labour_details'][1]['detail_pk']
        response = self.client.delete(reverse('core:invoice_labour_detail_item', args=[detail_pk]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['totals']['grand_total'], 130.0)
        self.assertEqual(Invoices.objects.get(invoice_pk=self.invoice_pk).grand_total, Decimal('130.00'))

    def test_missing_detail_returns_404(self):
        response = self.client.delete(reverse('core:invoice_labour_detail_item', args=[9999]))
        self.assertEqual(response.status_code, 404)


class RecomputeInvoicesViewTests(InvoiceViewTestCase):

    def test_recompute_endpoint(self):
        invoice = self.create_invoice()
        InvoiceLabourDetail.objects.filter(invoice_id=invoice['invoice_pk']).update(refund=Decimal('0'))

        response = self.post_json(reverse('core:recompute_invoices'), {'dry_run': True})
        self.assertEqual(response.json()['count'], 1)
        self.assertEqual(Invoices.objects.get().grand_total, Decimal('170.00'))

        response = self.post_json(reverse('core:recompute_invoices'), {'invoice_ids': [invoice['invoice_pk']]})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['changed'][0]['recomputed']['grand_total'], 160.0)
        self.assertEqual(Invoices.objects.get().grand_total, Decimal('160.00'))

    def test_recompute_rejects_bad_ids(self):
        response = self.post_json(reverse('core:recompute_invoices'), {'invoice_ids': ['abc']})
        self.assertEqual(response.status_code, 400)

    def test_recompute_rejects_bool_and_fractional_ids(self):
        for bad in ([True], [1.5], [None]):
            response = self.post_json(reverse('core:recompute_invoices'), {'invoice_ids': bad})
            self.assertEqual(response.status_code, 400)
