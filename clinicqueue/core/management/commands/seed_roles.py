"""
Seed-Command für die Standardrollen.

Verwendung:
    python manage.py seed_roles
"""

from django.core.management.base import BaseCommand

from clinicqueue.core.seeders import seed_roles


class Command(BaseCommand):
    help = "Create the standard RBAC roles (admin, assistant, doctor, billing)"

    def handle(self, *args, **options):
        stats = seed_roles()
        self.stdout.write(
            self.style.SUCCESS(
                f"Roles: {stats['core_roles']} defined, {stats['core_roles_created']} created."
            )
        )
