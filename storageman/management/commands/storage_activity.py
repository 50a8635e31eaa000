"""
Management command to print a storage's activity trail.

Usage:
    python manage.py storage_activity 12
    python manage.py storage_activity 12 --limit 50
"""

from django.core.management.base import BaseCommand, CommandError

from storageman import inventory
from storageman.exceptions import NotFoundError


class Command(BaseCommand):
    """Print activity log entries, newest first."""

    help = 'Shows the activity log of a storage'

    def add_arguments(self, parser):
        parser.add_argument('storage_id', type=int)
        parser.add_argument(
            '--limit',
            type=int,
            default=None,
            help='Number of entries (defaults to ACTIVITY_PAGE_SIZE)'
        )

    def handle(self, *args, **options):
        try:
            page = inventory.activity(options['storage_id'], limit=options['limit'])
        except NotFoundError as e:
            raise CommandError(e.message) from e

        for log in page.logs:
            self.stdout.write(
                f"{log.timestamp:%Y-%m-%d %H:%M:%S} {log.action:<12} {log.user} {log.message}"
            )
        if page.cursor is not None:
            self.stdout.write(self.style.WARNING('More entries available, raise --limit'))
