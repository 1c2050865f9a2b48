"""
Coupon views module.
"""
from .coupon_views import ValidateCouponView, ApplyCouponView, ActiveCouponsView

__all__ = [
    'ValidateCouponView',
    'ApplyCouponView',
    'ActiveCouponsView',
]
