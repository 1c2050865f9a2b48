"""
Coupon services module.
"""
from .coupon_service import CouponService, CouponValidationResult

__all__ = [
    'CouponService',
    'CouponValidationResult',
]
