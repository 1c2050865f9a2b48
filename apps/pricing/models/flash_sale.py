from django.core.exceptions import ValidationError
from django.db import models


class FlashSale(models.Model):
    """Time-boxed percentage discount on products, categories or the whole store"""

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    discount_percentage = models.DecimalField(max_digits=5, decimal_places=2)
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()

    product_ids = models.JSONField(default=list, blank=True)
    category_ids = models.JSONField(default=list, blank=True)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'flash_sales'
        ordering = ['-starts_at']
        indexes = [
            models.Index(fields=['is_active', 'starts_at', 'ends_at'], name='flash_sale_active_window_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.discount_percentage}%)"

    def clean(self):
        super().clean()
        if self.discount_percentage is not None and not (0 < self.discount_percentage <= 100):
            raise ValidationError({'discount_percentage': 'Must be between 0 and 100'})
        if self.starts_at and self.ends_at and self.ends_at <= self.starts_at:
            raise ValidationError({'ends_at': 'End time must be after start time'})

    @property
    def scope(self):
        if self.product_ids:
            return 'product', self.product_ids
        if self.category_ids:
            return 'category', self.category_ids
        return 'all', []

    def as_candidate(self, priority):
        from apps.pricing.services.rule_resolver import build_candidate

        applies_to, applies_to_ids = self.scope
        return build_candidate(
            'flash_sale',
            self.pk,
            self.name,
            'percentage',
            self.discount_percentage,
            applies_to=applies_to,
            applies_to_ids=applies_to_ids,
            priority=priority,
            is_active=self.is_active,
            starts_at=self.starts_at,
            ends_at=self.ends_at,
            rule_type='flash_sale',
        )
