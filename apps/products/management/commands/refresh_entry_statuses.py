"""
Management command to rewrite cached entry statuses.

Entry statuses are classified on write and go stale as days pass. Run this
nightly so admin listings and raw database queries agree with the API.

Usage:
    python manage.py refresh_entry_statuses
    python manage.py refresh_entry_statuses --date 2025-01-31
"""

from datetime import date

from django.core.management.base import BaseCommand, CommandError

from apps.products.services import refresh_entry_statuses


class Command(BaseCommand):
    help = 'Reclassify every product entry against today (or --date)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            help='Reference date in YYYY-MM-DD format (defaults to today)',
        )

    def handle(self, *args, **options):
        reference_date = None
        if options['date']:
            try:
                reference_date = date.fromisoformat(options['date'])
            except ValueError:
                raise CommandError(f"Invalid date: {options['date']}")

        changed = refresh_entry_statuses(reference_date=reference_date)

        self.stdout.write(
            self.style.SUCCESS(f'Updated status of {changed} entr{"y" if changed == 1 else "ies"}.')
        )
