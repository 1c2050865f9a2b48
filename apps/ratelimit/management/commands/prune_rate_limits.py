from django.core.management.base import BaseCommand

from apps.ratelimit.services import DatabaseRateLimiter


class Command(BaseCommand):
    help = 'Delete rate limit counters older than the retention period'

    def add_arguments(self, parser):
        parser.add_argument(
            '--hours',
            type=int,
            default=None,
            help='Retention in hours (defaults to RATE_LIMIT_RETENTION_HOURS)',
        )

    def handle(self, *args, **options):
        deleted = DatabaseRateLimiter().prune(older_than_hours=options['hours'])
        self.stdout.write(self.style.SUCCESS(f'Pruned {deleted} rate limit windows'))
