from django.db import models
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder

from apps.common.money import from_minor_units


class PaymentOrder(models.Model):
    """Provider-side order minted for an exact checkout total"""

    STATUS_CREATED = 'created'
    STATUS_PAID = 'paid'
    STATUS_FAILED = 'failed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_EXPIRED = 'expired'

    STATUS_CHOICES = [
        (STATUS_CREATED, 'Created'),
        (STATUS_PAID, 'Paid'),
        (STATUS_FAILED, 'Failed'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_EXPIRED, 'Expired'),
    ]

    # Provider identifiers
    provider_order_id = models.CharField(max_length=100, unique=True, help_text="Order id issued by the provider")
    receipt = models.CharField(max_length=64, db_index=True, help_text="Merchant receipt sent with the order")
    payment_id = models.CharField(max_length=100, blank=True, default='', help_text="Provider payment id once paid")

    amount = models.PositiveBigIntegerField(help_text="Amount in minor currency units (e.g. paise)")
    currency = models.CharField(max_length=3, default='INR')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_CREATED)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payment_orders',
    )

    # Coupon reserved at checkout, redeemed only after a verified payment
    coupon = models.ForeignKey(
        'coupons.Coupon',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payment_orders',
    )
    coupon_discount = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    # Priced breakdown the amount was derived from
    pricing_snapshot = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)

    failure_reason = models.CharField(max_length=255, blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'payment_orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='payment_order_status_idx'),
            models.Index(fields=['user'], name='payment_order_user_idx'),
        ]

    def __str__(self):
        return f"PaymentOrder {self.provider_order_id} - {self.status}"

    @property
    def amount_major(self):
        return from_minor_units(self.amount)

    @property
    def is_paid(self):
        return self.status == self.STATUS_PAID
