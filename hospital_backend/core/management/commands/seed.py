"""
Seed command: inserts the hospital reference data.

Usage:
    python manage.py seed           # seed an empty database
    python manage.py seed --flush   # empty all hospital tables, then seed
"""

from django.core.management.base import BaseCommand

from hospital_backend.core.seeders import seed_hospital


class Command(BaseCommand):
    help = "Seed database with the hospital reference data"

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete existing hospital data before seeding.",
        )

    def handle(self, *args, **options):
        flush = options.get("flush", False)

        self.stdout.write("=" * 60)
        self.stdout.write("  Hospital seed")
        self.stdout.write("=" * 60)

        stats = seed_hospital(flush=flush)
        if not stats:
            self.stdout.write(self.style.WARNING("Patients already exist; nothing seeded (use --flush)."))
            return

        for key, value in stats.items():
            self.stdout.write(f"  {key:<20} {value:>5}")
        self.stdout.write(self.style.SUCCESS("Seed complete."))
