"""
Management command to create the default admin account.

Usage:
    python manage.py create_default_admin
    python manage.py create_default_admin --email owner@example.com --password Secret123
"""

from django.core.management.base import BaseCommand

from accounts.services import ensure_default_admin


class Command(BaseCommand):
    help = 'Creates the default admin account (ADMIN_EMAIL / ADMIN_PASSWORD) if it does not exist'

    def add_arguments(self, parser):
        parser.add_argument('--email', help='Admin email (defaults to ADMIN_EMAIL)')
        parser.add_argument('--password', help='Admin password (defaults to ADMIN_PASSWORD)')
        parser.add_argument('--name', help='Admin display name (defaults to ADMIN_NAME)')

    def handle(self, *args, **options):
        user, created = ensure_default_admin(
            email=options.get('email'),
            password=options.get('password'),
            name=options.get('name'),
        )

        if created:
            self.stdout.write(self.style.SUCCESS(f'✓ Created admin user: {user.email}'))
        else:
            self.stdout.write(self.style.WARNING(f'User with email {user.email} already exists.'))

        self.stdout.write('\n' + '=' * 60)
        self.stdout.write(f'Email:     {user.email}')
        self.stdout.write(f'Name:      {user.name}')
        self.stdout.write(f'Role:      {user.get_role_display()}')
        self.stdout.write(f'Is Active: {user.is_active}')
        self.stdout.write('=' * 60)
        self.stdout.write('\n' + self.style.SUCCESS('LOGIN INSTRUCTIONS:'))
        self.stdout.write('POST to /api/auth/login with {"email": ..., "password": ...}')
        self.stdout.write('Use the returned token for admin API calls:')
        self.stdout.write('   Authorization: Bearer <token>')
