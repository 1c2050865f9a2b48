from django.core.management.base import BaseCommand

from apps.payments.services import PaymentGatewayService


class Command(BaseCommand):
    help = 'Expire unpaid payment orders older than PAYMENT_ORDER_TTL_MINUTES'

    def add_arguments(self, parser):
        parser.add_argument(
            '--minutes',
            type=int,
            default=None,
            help='Override the order TTL in minutes',
        )

    def handle(self, *args, **options):
        expired = PaymentGatewayService.expire_stale_orders(ttl_minutes=options['minutes'])
        self.stdout.write(self.style.SUCCESS(f'Expired {expired} payment orders'))
