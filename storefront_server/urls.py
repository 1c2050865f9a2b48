"""
URL configuration for storefront_server project.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/pricing/', include('apps.pricing.urls')),
    path('api/coupons/', include('apps.coupons.urls')),
    path('api/rate-limit/', include('apps.ratelimit.urls')),
    path('api/payments/', include('apps.payments.urls')),
    path('api/checkout/', include('apps.checkout.urls')),
    # OpenAPI documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/schema/swagger-ui/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/schema/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]
