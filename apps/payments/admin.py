from django.contrib import admin
from django.utils.html import format_html

from .models import PaymentOrder, PaymentVerificationLog


class PaymentVerificationLogInline(admin.TabularInline):
    """Inline admin for verification attempts"""
    model = PaymentVerificationLog
    extra = 0
    can_delete = False
    readonly_fields = ['payment_id', 'verified', 'reason', 'request_ip', 'created_at']
    fields = readonly_fields


@admin.register(PaymentOrder)
class PaymentOrderAdmin(admin.ModelAdmin):
    """Admin interface for payment orders"""

    list_display = [
        'provider_order_id', 'receipt', 'amount_display', 'currency',
        'status_display', 'user', 'coupon', 'created_at', 'paid_at'
    ]
    list_filter = ['status', 'currency', 'created_at']
    search_fields = ['provider_order_id', 'receipt', 'payment_id', 'user__username']
    ordering = ['-created_at']
    readonly_fields = [
        'provider_order_id', 'receipt', 'payment_id', 'amount', 'currency',
        'user', 'coupon', 'coupon_discount', 'pricing_snapshot',
        'created_at', 'updated_at', 'paid_at'
    ]

    fieldsets = (
        ('Provider', {
            'fields': ('provider_order_id', 'receipt', 'payment_id')
        }),
        ('Amount', {
            'fields': ('amount', 'currency', 'coupon', 'coupon_discount')
        }),
        ('Status', {
            'fields': ('status', 'failure_reason', 'paid_at')
        }),
        ('Pricing Snapshot', {
            'fields': ('pricing_snapshot',),
            'classes': ('collapse',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    inlines = [PaymentVerificationLogInline]

    def amount_display(self, obj):
        return f"{obj.amount_major} {obj.currency}"
    amount_display.short_description = 'Amount'
    amount_display.admin_order_field = 'amount'

    def status_display(self, obj):
        colors = {
            'created': '#1890ff',
            'paid': '#52c41a',
            'failed': '#f5222d',
            'cancelled': '#8c8c8c',
            'expired': '#fa8c16',
        }
        return format_html(
            '<span style="color: {};">{}</span>',
            colors.get(obj.status, '#000'),
            obj.get_status_display()
        )
    status_display.short_description = 'Status'
    status_display.admin_order_field = 'status'


@admin.register(PaymentVerificationLog)
class PaymentVerificationLogAdmin(admin.ModelAdmin):
    list_display = ['provider_order_id', 'payment_id', 'verified', 'reason', 'request_ip', 'created_at']
    list_filter = ['verified', 'created_at']
    search_fields = ['provider_order_id', 'payment_id']
    readonly_fields = ['payment_order', 'provider_order_id', 'payment_id', 'verified', 'reason', 'request_ip', 'created_at']
