from django.urls import path
from . import views

app_name = 'ratelimit'

urlpatterns = [
    path('check/', views.CheckRateLimitView.as_view(), name='check-rate-limit'),
]
