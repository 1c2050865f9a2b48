"""
Order total value object.

Encapsulates the checkout pricing policy (shipping, tax, discounts) in one
place. Instances are immutable; "changing" a value produces a new instance.

    order_total = OrderTotal(Decimal('150'), Decimal('20'), Decimal('5'))
    order_total.total              # Decimal('145.80')
    order_total.get_breakdown()
"""
from dataclasses import dataclass, asdict
from decimal import Decimal

from django.conf import settings

from apps.common.money import ZERO, to_decimal, quantize_money, clamp_non_negative


@dataclass(frozen=True)
class PricingPolicy:
    """Configured constants of the pricing policy (not derived state)."""
    free_shipping_threshold: Decimal = Decimal('100')
    flat_shipping_cost: Decimal = Decimal('10')
    tax_rate: Decimal = Decimal('0.08')
    gift_wrap_cost: Decimal = Decimal('5')

    @classmethod
    def from_settings(cls):
        config = getattr(settings, 'CHECKOUT_PRICING', {})
        defaults = cls()
        return cls(
            free_shipping_threshold=to_decimal(config.get('FREE_SHIPPING_THRESHOLD', defaults.free_shipping_threshold)),
            flat_shipping_cost=to_decimal(config.get('FLAT_SHIPPING_COST', defaults.flat_shipping_cost)),
            tax_rate=to_decimal(config.get('TAX_RATE', defaults.tax_rate)),
            gift_wrap_cost=to_decimal(config.get('GIFT_WRAP_COST', defaults.gift_wrap_cost)),
        )


@dataclass(frozen=True)
class OrderBreakdown:
    subtotal: Decimal
    coupon_discount: Decimal
    gift_wrap_cost: Decimal
    shipping_cost: Decimal
    taxable_amount: Decimal
    tax: Decimal
    total: Decimal
    has_free_shipping: bool
    amount_to_free_shipping: Decimal

    def as_dict(self):
        return asdict(self)


class OrderTotal:
    """Immutable order total. All derived values are computed on access."""

    __slots__ = ('_subtotal', '_coupon_discount', '_gift_wrap_cost', '_policy')

    def __init__(self, subtotal, coupon_discount=ZERO, gift_wrap_cost=ZERO, policy=None):
        values = {
            'subtotal': to_decimal(subtotal),
            'coupon_discount': to_decimal(coupon_discount),
            'gift_wrap_cost': to_decimal(gift_wrap_cost),
        }
        for name, value in values.items():
            if value < ZERO:
                raise ValueError(f"{name} must be non-negative, got {value}")

        object.__setattr__(self, '_subtotal', values['subtotal'])
        object.__setattr__(self, '_coupon_discount', values['coupon_discount'])
        object.__setattr__(self, '_gift_wrap_cost', values['gift_wrap_cost'])
        object.__setattr__(self, '_policy', policy or PricingPolicy.from_settings())

    def __setattr__(self, name, value):
        raise AttributeError("OrderTotal is immutable")

    def __repr__(self):
        return (
            f"OrderTotal(subtotal={self._subtotal}, coupon_discount={self._coupon_discount}, "
            f"gift_wrap_cost={self._gift_wrap_cost})"
        )

    def __eq__(self, other):
        if not isinstance(other, OrderTotal):
            return NotImplemented
        return (
            self._subtotal == other._subtotal
            and self._coupon_discount == other._coupon_discount
            and self._gift_wrap_cost == other._gift_wrap_cost
            and self._policy == other._policy
        )

    def __hash__(self):
        return hash((self._subtotal, self._coupon_discount, self._gift_wrap_cost, self._policy))

    @property
    def subtotal(self):
        return self._subtotal

    @property
    def coupon_discount(self):
        return self._coupon_discount

    @property
    def gift_wrap_cost(self):
        return self._gift_wrap_cost

    @property
    def policy(self):
        return self._policy

    @property
    def has_free_shipping(self):
        """Free shipping is decided on the pre-discount subtotal"""
        return self._subtotal >= self._policy.free_shipping_threshold

    @property
    def shipping_cost(self):
        return ZERO if self.has_free_shipping else self._policy.flat_shipping_cost

    @property
    def taxable_amount(self):
        """Discount applies before tax, gift wrap is taxed, never below zero"""
        return clamp_non_negative(self._subtotal - self._coupon_discount + self._gift_wrap_cost)

    @property
    def tax(self):
        return self.taxable_amount * self._policy.tax_rate

    @property
    def total(self):
        return quantize_money(self.taxable_amount + self.shipping_cost + self.tax)

    @property
    def amount_to_free_shipping(self):
        return clamp_non_negative(self._policy.free_shipping_threshold - self._subtotal)

    def get_breakdown(self) -> OrderBreakdown:
        return OrderBreakdown(
            subtotal=self._subtotal,
            coupon_discount=self._coupon_discount,
            gift_wrap_cost=self._gift_wrap_cost,
            shipping_cost=self.shipping_cost,
            taxable_amount=self.taxable_amount,
            tax=self.tax,
            total=self.total,
            has_free_shipping=self.has_free_shipping,
            amount_to_free_shipping=self.amount_to_free_shipping,
        )

    def with_coupon_discount(self, discount):
        return OrderTotal(self._subtotal, discount, self._gift_wrap_cost, self._policy)

    def with_gift_wrap(self, cost):
        return OrderTotal(self._subtotal, self._coupon_discount, cost, self._policy)

    @classmethod
    def free_shipping_threshold(cls, policy=None):
        return (policy or PricingPolicy.from_settings()).free_shipping_threshold

    @classmethod
    def tax_rate_percentage(cls, policy=None):
        return (policy or PricingPolicy.from_settings()).tax_rate * 100


def compute_total(subtotal, coupon_discount=ZERO, gift_wrap_cost=ZERO, policy=None) -> OrderBreakdown:
    """Pure function form of OrderTotal: price a (subtotal, discount, extras) triple."""
    return OrderTotal(subtotal, coupon_discount, gift_wrap_cost, policy).get_breakdown()
