"""
Coupon serializers module.
"""
from .coupon_serializers import CouponSerializer, CouponValidateSerializer, CouponApplySerializer

__all__ = [
    'CouponSerializer',
    'CouponValidateSerializer',
    'CouponApplySerializer',
]
