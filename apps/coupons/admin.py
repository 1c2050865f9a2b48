from django.contrib import admin

from .models import Coupon, CouponUse


class CouponUseInline(admin.TabularInline):
    """Inline admin for coupon redemptions"""
    model = CouponUse
    extra = 0
    readonly_fields = ['user', 'order_id', 'discount_applied', 'created_at']
    can_delete = False


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    """Admin interface for coupons"""

    list_display = [
        'code', 'discount_type', 'discount_value', 'min_order_amount',
        'uses_count', 'max_uses', 'max_uses_per_user', 'is_active', 'expires_at'
    ]
    list_filter = ['discount_type', 'applies_to', 'is_active']
    search_fields = ['code', 'description']
    ordering = ['-created_at']
    readonly_fields = ['uses_count', 'created_at', 'updated_at']

    fieldsets = (
        ('Coupon', {
            'fields': ('code', 'description', 'is_active')
        }),
        ('Discount', {
            'fields': ('discount_type', 'discount_value', 'min_order_amount', 'applies_to', 'applies_to_ids')
        }),
        ('Limits', {
            'fields': ('max_uses', 'uses_count', 'max_uses_per_user')
        }),
        ('Validity', {
            'fields': ('starts_at', 'expires_at')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    inlines = [CouponUseInline]


@admin.register(CouponUse)
class CouponUseAdmin(admin.ModelAdmin):
    list_display = ['coupon', 'user', 'order_id', 'discount_applied', 'created_at']
    search_fields = ['coupon__code', 'order_id']
    readonly_fields = ['coupon', 'user', 'order_id', 'discount_applied', 'created_at']
