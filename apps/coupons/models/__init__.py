"""
Coupon models module.

All models are exported from this module to maintain backward compatibility.
"""
from .coupon import Coupon
from .coupon_use import CouponUse

__all__ = [
    'Coupon',
    'CouponUse',
]
