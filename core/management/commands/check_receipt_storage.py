"""
Management command to check that purchase receipts can be stored.
Run with: python manage.py check_receipt_storage
"""
from django.core.management.base import BaseCommand, CommandError
from django.conf import settings
from django.core.files.storage import default_storage
from django.core.files.base import ContentFile
from core.models import Purchases


class Command(BaseCommand):
    help = 'Show the receipt storage backend and round-trip a test file through it'

    def handle(self, *args, **options):
        storage = default_storage
        upload_to = Purchases._meta.get_field('receipt').upload_to

        self.stdout.write(f"Storage class: {storage.__class__.__module__}.{storage.__class__.__name__}")
        self.stdout.write(f"MEDIA_URL: {settings.MEDIA_URL}")
        if hasattr(storage, 'bucket_name'):
            self.stdout.write(f"Bucket name: {storage.bucket_name}")
            self.stdout.write(f"Location prefix: {storage.location}")
        else:
            self.stdout.write(f"MEDIA_ROOT: {settings.MEDIA_ROOT}")

        path = storage.save(f'{upload_to}storage_check.txt', ContentFile(b'receipt storage check'))
        try:
            self.stdout.write(f"Saved: {path}")
            self.stdout.write(f"URL: {storage.url(path)}")
            with storage.open(path, 'rb') as f:
                if f.read() != b'receipt storage check':
                    raise CommandError(f'Read back different content from {path}')
        finally:
            storage.delete(path)

        self.stdout.write(self.style.SUCCESS('Receipt storage OK'))
