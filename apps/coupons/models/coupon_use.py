from django.db import models
from django.conf import settings


class CouponUse(models.Model):
    """One redemption of a coupon by a user for an order"""

    coupon = models.ForeignKey('Coupon', on_delete=models.CASCADE, related_name='uses')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='coupon_uses',
    )
    order_id = models.CharField(max_length=100, blank=True, default='', help_text="Payment order the coupon was used on")
    discount_applied = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'coupon_uses'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['coupon', 'user'], name='coupon_uses_coupon_user_idx'),
            models.Index(fields=['order_id'], name='coupon_uses_order_id_idx'),
        ]

    def __str__(self):
        return f"{self.coupon_id} used by {self.user_id} on {self.order_id or '-'}"
