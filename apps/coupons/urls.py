from django.urls import path
from . import views

app_name = 'coupons'

urlpatterns = [
    path('validate/', views.ValidateCouponView.as_view(), name='validate-coupon'),
    path('apply/', views.ApplyCouponView.as_view(), name='apply-coupon'),
    path('active/', views.ActiveCouponsView.as_view(), name='active-coupons'),
]
