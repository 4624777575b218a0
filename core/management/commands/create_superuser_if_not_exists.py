from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth.models import User
import environ

env = environ.Env()


class Command(BaseCommand):
    help = 'Create the admin superuser from SUPERUSER_* environment variables if it doesn\'t exist'

    def handle(self, *args, **options):
        username = env('SUPERUSER_USERNAME', default='admin')
        email = env('SUPERUSER_EMAIL', default='admin@example.com')
        password = env('SUPERUSER_PASSWORD', default=None)

        if not password:
            raise CommandError('SUPERUSER_PASSWORD must be set')

        if not User.objects.filter(username=username).exists():
            User.objects.create_superuser(username=username, email=email, password=password)
            self.stdout.write(self.style.SUCCESS(f'Superuser "{username}" created successfully'))
        else:
            # Update existing user's password
            user = User.objects.get(username=username)
            user.set_password(password)
            user.save()
            self.stdout.write(self.style.SUCCESS(f'Superuser "{username}" password updated'))
