from django.db import models
from django.utils import timezone


class Coupon(models.Model):
    """User-redeemable discount code"""

    DISCOUNT_TYPE_CHOICES = [
        ('percentage', 'Percentage'),
        ('fixed', 'Fixed Amount'),
    ]

    APPLIES_TO_CHOICES = [
        ('all', 'All Items'),
        ('category', 'Categories'),
        ('product', 'Products'),
    ]

    # Stored upper-case so lookups are case-insensitive
    code = models.CharField(max_length=50, unique=True)
    description = models.CharField(max_length=255, blank=True, default='')

    discount_type = models.CharField(max_length=20, choices=DISCOUNT_TYPE_CHOICES)
    discount_value = models.DecimalField(max_digits=10, decimal_places=2)
    min_order_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    max_uses = models.PositiveIntegerField(null=True, blank=True, help_text="Global cap, empty for unlimited")
    uses_count = models.PositiveIntegerField(default=0)
    max_uses_per_user = models.PositiveIntegerField(null=True, blank=True, help_text="Per-user cap, empty for unlimited")

    applies_to = models.CharField(max_length=20, choices=APPLIES_TO_CHOICES, default='all')
    applies_to_ids = models.JSONField(default=list, blank=True, help_text="Product or category ids in scope")

    starts_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'coupons'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_active', 'starts_at'], name='coupons_active_starts_idx'),
            models.Index(fields=['expires_at'], name='coupons_expires_at_idx'),
        ]

    def __str__(self):
        return f"{self.code} ({self.get_discount_type_display()} {self.discount_value})"

    def save(self, *args, **kwargs):
        self.code = (self.code or '').strip().upper()
        super().save(*args, **kwargs)

    @property
    def is_exhausted(self):
        return self.max_uses is not None and self.uses_count >= self.max_uses

    def is_within_window(self, now=None):
        now = now or timezone.now()
        if self.starts_at and now < self.starts_at:
            return False
        if self.expires_at and now > self.expires_at:
            return False
        return True
