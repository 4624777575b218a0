"""
Management command to seed sample notifications.
Usage: python manage.py seed_notifications [--username admin]
"""

from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth.models import User
from core.models import Notifications


SAMPLE_NOTIFICATIONS = [
    {
        'title': 'Welcome to Sitebook!',
        'message': 'Thank you for using our construction management system. We\'re here to help you manage your projects efficiently.',
        'type': 'info',
        'status': 'unread',
    },
    {
        'title': 'New Site Created',
        'message': 'Construction site \'Downtown Plaza\' has been successfully created and is now ready for management.',
        'type': 'success',
        'status': 'unread',
        'related_entity_type': 'site',
        'related_entity_id': 1,
    },
    {
        'title': 'Invoice Payment Due',
        'message': 'Invoice #INV-001 for Downtown Plaza project is due for payment. Please review and process the payment.',
        'type': 'warning',
        'status': 'unread',
        'related_entity_type': 'invoice',
        'related_entity_id': 1,
    },
    {
        'title': 'Labour Attendance Updated',
        'message': 'Daily attendance has been recorded for 15 workers at Downtown Plaza site.',
        'type': 'info',
        'status': 'read',
    },
    {
        'title': 'Material Purchase Completed',
        'message': 'Purchase order for cement and steel has been completed. Materials will be delivered tomorrow.',
        'type': 'success',
        'status': 'unread',
        'related_entity_type': 'purchase',
        'related_entity_id': 1,
    },
]


class Command(BaseCommand):
    help = 'Seed sample notifications (shared with all users unless --username is given)'

    def add_arguments(self, parser):
        parser.add_argument('--username', help='Attach the notifications to this user')

    def handle(self, *args, **options):
        user = None
        if options.get('username'):
            try:
                user = User.objects.get(username=options['username'])
            except User.DoesNotExist:
                raise CommandError(f'User "{options["username"]}" does not exist')

        created_count = 0
        for sample in SAMPLE_NOTIFICATIONS:
            notification, created = Notifications.objects.get_or_create(
                user=user,
                title=sample['title'],
                defaults=sample,
            )
            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f'Created notification: {notification.title}'))
            else:
                self.stdout.write(f'Notification exists: {notification.title}')

        self.stdout.write(self.style.SUCCESS(f'Done. {created_count} notifications created.'))
