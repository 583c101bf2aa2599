from django.core.management import BaseCommand

from user_auth_app.models import User


class Command(BaseCommand):
    """
    Creates the default administrator account when the database has none.

        python manage.py ensure_admin --email admin@example.com --password 'Admin@123'
    """
    help = "Creates the default administrator if no admin account exists yet."

    def add_arguments(self, parser):
        parser.add_argument('--name', default='System Administrator')
        parser.add_argument('--email', default='admin@store-ratings.com')
        parser.add_argument('--password', default='Admin@123')
        parser.add_argument('--address', default='123 Admin Street, Admin City, AC 12345')

    def handle(self, *args, **options):
        if User.objects.filter(role=User.Role.ADMIN).exists():
            self.stdout.write("Admin user already exists.")
            return

        User.objects.create_user(
            email=options['email'],
            password=options['password'],
            name=options['name'],
            address=options['address'],
            role=User.Role.ADMIN,
        )
        self.stdout.write(self.style.SUCCESS(f"Created admin user {options['email']}."))
