"""
Management command to re-derive stored invoice totals from labour details.
Usage: python manage.py recompute_invoice_totals [--invoice 12 --invoice 13] [--dry-run]
"""

from django.core.management.base import BaseCommand
from core.services.invoices import recompute_invoice_totals


class Command(BaseCommand):
    help = 'Rewrite stored invoice totals that no longer match their labour details'

    def add_arguments(self, parser):
        parser.add_argument(
            '--invoice', type=int, action='append', dest='invoice_pks',
            help='Invoice pk to check (repeatable, default: all invoices)'
        )
        parser.add_argument(
            '--dry-run', action='store_true',
            help='Report out-of-date invoices without saving'
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        changed = recompute_invoice_totals(invoice_pks=options.get('invoice_pks'), dry_run=dry_run)

        for entry in changed:
            self.stdout.write(
                f"Invoice {entry['invoice_number']} (pk={entry['invoice_pk']}): "
                f"grand_total {entry['stored']['grand_total']} -> {entry['recomputed']['grand_total']}"
            )

        if not changed:
            self.stdout.write(self.style.SUCCESS('All invoice totals are up to date'))
        elif dry_run:
            self.stdout.write(self.style.WARNING(f'{len(changed)} invoices out of date (dry run, nothing saved)'))
        else:
            self.stdout.write(self.style.SUCCESS(f'Updated totals on {len(changed)} invoices'))
