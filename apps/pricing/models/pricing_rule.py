from django.core.exceptions import ValidationError
from django.db import models
from rest_framework import serializers

from apps.common.validators import validate_discount_value


class DynamicPricingRule(models.Model):
    """Automatic discount applied when its conditions hold for a cart"""

    RULE_TYPE_CHOICES = [
        ('cart_value', 'Cart Value'),
        ('quantity', 'Quantity'),
        ('category', 'Category'),
        ('product', 'Product'),
        ('time_based', 'Time Based'),
    ]

    DISCOUNT_TYPE_CHOICES = [
        ('percentage', 'Percentage'),
        ('fixed', 'Fixed Amount'),
    ]

    APPLIES_TO_CHOICES = [
        ('all', 'All Items'),
        ('category', 'Categories'),
        ('product', 'Products'),
    ]

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    rule_type = models.CharField(max_length=20, choices=RULE_TYPE_CHOICES, default='cart_value')

    # JSON condition tree, see apps.pricing.services.conditions
    conditions = models.JSONField(default=dict, blank=True, help_text="Condition expression, {} always matches")

    discount_type = models.CharField(max_length=20, choices=DISCOUNT_TYPE_CHOICES)
    discount_value = models.DecimalField(max_digits=10, decimal_places=2)

    applies_to = models.CharField(max_length=20, choices=APPLIES_TO_CHOICES, default='all')
    applies_to_ids = models.JSONField(default=list, blank=True, help_text="Product or category ids in scope")

    priority = models.IntegerField(default=0, help_text="Higher priority wins")
    is_active = models.BooleanField(default=True)
    starts_at = models.DateTimeField(null=True, blank=True)
    ends_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'dynamic_pricing_rules'
        ordering = ['-priority', 'id']
        indexes = [
            models.Index(fields=['is_active', 'priority'], name='pricing_rule_active_prio_idx'),
            models.Index(fields=['starts_at', 'ends_at'], name='pricing_rule_window_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.get_discount_type_display()} {self.discount_value})"

    def clean(self):
        from apps.pricing.services.conditions import ConditionError, parse_condition

        super().clean()
        try:
            validate_discount_value(self.discount_type, self.discount_value)
        except serializers.ValidationError as e:
            raise ValidationError({'discount_value': str(e.detail['discount_value'])})
        try:
            parse_condition(self.conditions)
        except ConditionError as e:
            raise ValidationError({'conditions': str(e)})
        if self.applies_to != 'all' and not self.applies_to_ids:
            raise ValidationError({'applies_to_ids': 'Scoped rules need at least one id'})
        if self.starts_at and self.ends_at and self.ends_at <= self.starts_at:
            raise ValidationError({'ends_at': 'End time must be after start time'})

    def as_candidate(self):
        from apps.pricing.services.rule_resolver import build_candidate

        return build_candidate(
            'dynamic_rule',
            self.pk,
            self.name,
            self.discount_type,
            self.discount_value,
            conditions=self.conditions,
            applies_to=self.applies_to,
            applies_to_ids=self.applies_to_ids,
            priority=self.priority,
            is_active=self.is_active,
            starts_at=self.starts_at,
            ends_at=self.ends_at,
            rule_type=self.rule_type,
        )
