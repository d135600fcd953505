"""
Repariert die Warteschlange.

Verwendung:
    python manage.py normalize_queue            # Status-Backfill + Neunummerierung
    python manage.py normalize_queue --dry-run  # Nur anzeigen, nichts schreiben
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from clinicqueue.waitlist.store import QueueStore


class Command(BaseCommand):
    help = "Backfill legacy patient status and renumber waiting positions to 1..N"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would change and roll the transaction back.",
        )

    def handle(self, *args, **options):
        dry_run = options.get("dry_run", False)

        with transaction.atomic(using="default"):
            stats = QueueStore(using="default").normalize()
            if dry_run:
                transaction.set_rollback(True, using="default")

        prefix = "[dry-run] " if dry_run else ""
        self.stdout.write(
            self.style.SUCCESS(
                f"{prefix}Status backfilled: {stats['backfilled']}, positions renumbered: {stats['renumbered']}"
            )
        )
