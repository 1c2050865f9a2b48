from django.contrib import admin
from django.utils import timezone

from .models import DynamicPricingRule, FlashSale


@admin.register(DynamicPricingRule)
class DynamicPricingRuleAdmin(admin.ModelAdmin):
    """Admin interface for automatic pricing rules"""

    list_display = [
        'name', 'rule_type', 'discount_type', 'discount_value',
        'applies_to', 'priority', 'is_active', 'starts_at', 'ends_at'
    ]
    list_filter = ['rule_type', 'discount_type', 'applies_to', 'is_active']
    search_fields = ['name', 'description']
    ordering = ['-priority', 'id']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Rule', {
            'fields': ('name', 'description', 'rule_type', 'conditions')
        }),
        ('Discount', {
            'fields': ('discount_type', 'discount_value', 'applies_to', 'applies_to_ids')
        }),
        ('Scheduling', {
            'fields': ('priority', 'is_active', 'starts_at', 'ends_at')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(FlashSale)
class FlashSaleAdmin(admin.ModelAdmin):
    """Admin interface for flash sales"""

    list_display = ['name', 'discount_percentage', 'starts_at', 'ends_at', 'is_active', 'is_running']
    list_filter = ['is_active', 'starts_at']
    search_fields = ['name', 'description']
    ordering = ['-starts_at']
    readonly_fields = ['created_at']

    def is_running(self, obj):
        now = timezone.now()
        return obj.is_active and obj.starts_at <= now <= obj.ends_at
    is_running.boolean = True
    is_running.short_description = 'Running'
