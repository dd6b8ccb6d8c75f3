"""
Management command to send expiration reminders for due schedules.

Meant to run once an hour (cron or a scheduler). Every enabled schedule
whose time falls in the current hour, and whose weekday matches for
weekly schedules, triggers the device's expiration reminders.

Usage:
    python manage.py send_scheduled_reminders
    python manage.py send_scheduled_reminders --dry-run
"""

import logging

from django.core.management.base import BaseCommand

from apps.notifications.services import (
    get_due_schedules,
    send_expiration_reminders,
    PushTokenNotFoundError,
)

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Send expiration reminders to devices whose schedule is due this hour'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='List due devices without sending anything',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        device_ids = sorted({schedule.device_id for schedule in get_due_schedules()})

        if not device_ids:
            self.stdout.write(self.style.SUCCESS('No schedules due this hour.'))
            return

        self.stdout.write(f'{len(device_ids)} device(s) due:')

        if dry_run:
            for device_id in device_ids:
                self.stdout.write(f'  - {device_id}')
            self.stdout.write(self.style.WARNING('--dry-run mode: No notifications sent.'))
            return

        total = 0
        for device_id in device_ids:
            try:
                sent = send_expiration_reminders(device_id=device_id)
            except PushTokenNotFoundError:
                logger.warning("Schedule due for device %s without a push token", device_id)
                self.stdout.write(self.style.WARNING(f'  - {device_id}: no push token'))
                continue

            total += sent
            self.stdout.write(f'  - {device_id}: {sent} sent')

        self.stdout.write(self.style.SUCCESS(f'Sent {total} reminder(s).'))
