"""
Checkout orchestration.

Turns a cart into an authoritative total: picks one discount from the
automatic pricing rules and the customer's coupon, prices the order, and
mints a payment order for exactly that total.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
import logging

from django.utils import timezone

from apps.common.money import ZERO
from apps.coupons.services import CouponService, CouponValidationResult
from apps.payments.services import PaymentGatewayService
from apps.pricing.services import AppliedPricingRule, OrderBreakdown, OrderTotal, PricingPolicy, PricingRuleResolver

logger = logging.getLogger(__name__)

SOURCE_PRICING_RULE = 'pricing_rule'
SOURCE_COUPON = 'coupon'

BETTER_DISCOUNT_APPLIED = "a better automatic discount is already applied"


@dataclass(frozen=True)
class CheckoutQuote:
    breakdown: OrderBreakdown
    discount: Decimal
    discount_source: Optional[str]
    applied_rule: Optional[AppliedPricingRule]
    coupon_result: Optional[CouponValidationResult]

    @property
    def coupon(self):
        if self.discount_source == SOURCE_COUPON:
            return self.coupon_result.coupon
        return None

    @property
    def coupon_message(self):
        if self.coupon_result is None:
            return None
        if not self.coupon_result.valid:
            return self.coupon_result.message
        if self.discount_source != SOURCE_COUPON:
            return BETTER_DISCOUNT_APPLIED
        return None

    def as_dict(self):
        coupon = self.coupon
        return {
            'subtotal': self.breakdown.subtotal,
            'discount': self.discount,
            'discountSource': self.discount_source,
            'pricingRule': self.applied_rule.as_dict() if self.applied_rule else None,
            'coupon': {'id': coupon.pk, 'code': coupon.code} if coupon else None,
            'couponValid': self.coupon_result.valid if self.coupon_result else None,
            'couponMessage': self.coupon_message,
            'giftWrapCost': self.breakdown.gift_wrap_cost,
            'shippingCost': self.breakdown.shipping_cost,
            'taxableAmount': self.breakdown.taxable_amount,
            'tax': self.breakdown.tax,
            'total': self.breakdown.total,
            'hasFreeShipping': self.breakdown.has_free_shipping,
            'amountToFreeShipping': self.breakdown.amount_to_free_shipping,
        }


class CheckoutService:
    """Service class for checkout operations"""

    @staticmethod
    def quote(cart, user=None, coupon_code=None, gift_wrap=False, now=None, policy=None) -> CheckoutQuote:
        """
        Price a cart. Discounts never stack: the larger of the best pricing
        rule and the coupon wins, and on a tie the automatic rule is kept so
        the coupon is not consumed.
        """
        now = now or timezone.now()
        policy = policy or PricingPolicy.from_settings()

        applied_rule = PricingRuleResolver.select_applicable_rule(cart, now)
        coupon_result = None
        if coupon_code:
            coupon_result = CouponService.validate_coupon(coupon_code, cart.subtotal, user=user, cart=cart, now=now)

        rule_discount = applied_rule.discount if applied_rule else ZERO
        coupon_discount = coupon_result.discount if coupon_result and coupon_result.valid else ZERO

        if coupon_discount > rule_discount:
            discount, source = coupon_discount, SOURCE_COUPON
        elif rule_discount > ZERO:
            discount, source = rule_discount, SOURCE_PRICING_RULE
        else:
            discount, source = ZERO, None

        gift_wrap_cost = policy.gift_wrap_cost if gift_wrap else ZERO
        breakdown = OrderTotal(cart.subtotal, discount, gift_wrap_cost, policy).get_breakdown()

        return CheckoutQuote(
            breakdown=breakdown,
            discount=discount,
            discount_source=source,
            applied_rule=applied_rule,
            coupon_result=coupon_result,
        )

    @staticmethod
    def place(cart, user=None, coupon_code=None, gift_wrap=False, currency=None, receipt=None, client=None):
        """
        Quote the cart and mint a payment order for the exact total.

        A chosen coupon is only reserved on the payment order; it is redeemed
        once the payment signature is verified.
        """
        quote = CheckoutService.quote(cart, user=user, coupon_code=coupon_code, gift_wrap=gift_wrap)

        order = PaymentGatewayService.create_order(
            quote.breakdown.total,
            currency=currency,
            receipt=receipt,
            user=user,
            coupon=quote.coupon,
            coupon_discount=quote.discount if quote.coupon else ZERO,
            pricing_snapshot=quote.as_dict(),
            client=client,
        )
        logger.info(f"Checkout placed order {order['orderId']} for total {quote.breakdown.total}")

        return {'quote': quote, 'order': order}
