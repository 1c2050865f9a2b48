"""
Coupon validation and redemption service.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
import logging

from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone

from apps.common.money import ZERO, to_decimal, quantize_money
from apps.pricing.services import calculate_discount
from ..models import Coupon, CouponUse

logger = logging.getLogger(__name__)

INVALID_CODE = "invalid code"
NOT_YET_ACTIVE = "not yet active"
EXPIRED = "expired"
BELOW_MINIMUM = "below minimum order amount"
USAGE_LIMIT_REACHED = "usage limit reached"
LOGIN_REQUIRED = "login required to use this coupon"
ALREADY_USED = "you have already used this coupon"
NOT_APPLICABLE = "coupon does not apply to items in your cart"
NOT_REDEEMABLE = "coupon is not currently active"


@dataclass(frozen=True)
class CouponValidationResult:
    valid: bool
    message: Optional[str] = None
    discount: Decimal = ZERO
    coupon: Optional[Coupon] = None

    @classmethod
    def invalid(cls, message, coupon=None):
        return cls(valid=False, message=message, coupon=coupon)

    def as_dict(self):
        data = {'valid': self.valid}
        if self.message:
            data['message'] = self.message
        if self.valid:
            data['discount'] = self.discount
            data['coupon'] = {
                'id': self.coupon.pk,
                'code': self.coupon.code,
                'discountType': self.coupon.discount_type,
                'discountValue': self.coupon.discount_value,
            }
        return data


def _authenticated(user):
    return user is not None and getattr(user, 'is_authenticated', False)


def _user_use_count(coupon, user):
    return CouponUse.objects.filter(coupon=coupon, user=user).count()


class CouponService:
    """Service class for coupon operations"""

    @staticmethod
    def get_coupon_by_code(code):
        """Active coupon for a code, matched case-insensitively"""
        code = (code or '').strip().upper()
        if not code:
            return None
        return Coupon.objects.filter(code=code, is_active=True).first()

    @staticmethod
    def get_coupon_by_id(coupon_id):
        return Coupon.objects.filter(pk=coupon_id).first()

    @staticmethod
    def validate_coupon(code, order_amount, user=None, cart=None, now=None) -> CouponValidationResult:
        """
        Check a coupon code against an order amount and the caller's usage.

        Checks run in a fixed order and stop at the first failure. Business
        failures come back as an invalid result, never as an exception.
        """
        now = now or timezone.now()
        order_amount = to_decimal(order_amount)

        coupon = CouponService.get_coupon_by_code(code)
        if coupon is None:
            return CouponValidationResult.invalid(INVALID_CODE)

        if coupon.starts_at and now < coupon.starts_at:
            return CouponValidationResult.invalid(NOT_YET_ACTIVE, coupon)
        if coupon.expires_at and now > coupon.expires_at:
            return CouponValidationResult.invalid(EXPIRED, coupon)

        if order_amount < coupon.min_order_amount:
            return CouponValidationResult.invalid(BELOW_MINIMUM, coupon)

        if coupon.is_exhausted:
            return CouponValidationResult.invalid(USAGE_LIMIT_REACHED, coupon)

        if coupon.max_uses_per_user is not None:
            if not _authenticated(user):
                return CouponValidationResult.invalid(LOGIN_REQUIRED, coupon)
            if _user_use_count(coupon, user) >= coupon.max_uses_per_user:
                return CouponValidationResult.invalid(ALREADY_USED, coupon)

        base = order_amount
        if cart is not None and coupon.applies_to != 'all':
            if not cart.lines_in_scope(coupon.applies_to, coupon.applies_to_ids):
                return CouponValidationResult.invalid(NOT_APPLICABLE, coupon)
            base = min(cart.scoped_subtotal(coupon.applies_to, coupon.applies_to_ids), order_amount)

        discount = calculate_discount(coupon.discount_type, coupon.discount_value, base)
        return CouponValidationResult(valid=True, discount=discount, coupon=coupon)

    @staticmethod
    def apply_coupon(coupon_id, order_id, discount_applied, user=None, now=None):
        """
        Record a redemption and bump the coupon's use counter.

        The coupon row is locked for the duration so concurrent redemptions
        cannot push uses_count past max_uses. The coupon must be enabled and
        inside its window at ``now``.
        """
        now = now or timezone.now()
        user = user if _authenticated(user) else None
        order_id = order_id or ''

        with transaction.atomic():
            coupon = Coupon.objects.select_for_update().filter(pk=coupon_id).first()
            if coupon is None:
                return {'success': False, 'message': INVALID_CODE}

            if order_id and CouponUse.objects.filter(coupon=coupon, order_id=order_id).exists():
                return {'success': True, 'message': 'Coupon already applied to this order', 'coupon': coupon}

            if not coupon.is_active or not coupon.is_within_window(now):
                return {'success': False, 'message': NOT_REDEEMABLE}

            if coupon.is_exhausted:
                return {'success': False, 'message': USAGE_LIMIT_REACHED}

            if coupon.max_uses_per_user is not None:
                if user is None:
                    return {'success': False, 'message': LOGIN_REQUIRED}
                if _user_use_count(coupon, user) >= coupon.max_uses_per_user:
                    return {'success': False, 'message': ALREADY_USED}

            updated = Coupon.objects.filter(
                Q(max_uses__isnull=True) | Q(uses_count__lt=F('max_uses')),
                pk=coupon.pk,
            ).update(uses_count=F('uses_count') + 1)
            if not updated:
                return {'success': False, 'message': USAGE_LIMIT_REACHED}

            CouponUse.objects.create(
                coupon=coupon,
                user=user,
                order_id=order_id,
                discount_applied=quantize_money(discount_applied),
            )

        coupon.refresh_from_db(fields=['uses_count'])
        logger.info(f"Coupon {coupon.code} applied to order {order_id or '-'} ({coupon.uses_count} uses)")
        return {'success': True, 'message': 'Coupon applied successfully', 'coupon': coupon}

    @staticmethod
    def get_active_coupons(now=None):
        """Coupons that are enabled, inside their window and not used up"""
        now = now or timezone.now()
        return Coupon.objects.filter(
            Q(expires_at__isnull=True) | Q(expires_at__gte=now),
            Q(max_uses__isnull=True) | Q(uses_count__lt=F('max_uses')),
            is_active=True,
            starts_at__lte=now,
        ).order_by('-created_at')
