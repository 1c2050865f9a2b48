from django.contrib import admin

from .models import RateLimitWindow


@admin.register(RateLimitWindow)
class RateLimitWindowAdmin(admin.ModelAdmin):
    """Read-only view of rate limit counters"""

    list_display = ['identifier', 'endpoint', 'window_start', 'request_count']
    list_filter = ['endpoint']
    search_fields = ['identifier', 'endpoint']
    ordering = ['-window_start']
    readonly_fields = ['identifier', 'endpoint', 'window_start', 'request_count']

    def has_add_permission(self, request):
        return False
