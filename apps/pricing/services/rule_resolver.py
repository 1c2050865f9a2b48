"""
Pricing rule resolver.

Selects at most one automatic discount for a cart from the active dynamic
pricing rules and flash sales. Selection is pure: nothing is written and
the same (cart, now, rules) input always yields the same result.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple
import logging

from django.conf import settings
from django.utils import timezone

from apps.common.money import ZERO, to_decimal
from .conditions import Always, Condition, ConditionError, parse_condition

logger = logging.getLogger(__name__)

# Lower rank wins when priorities are equal
SCOPE_SPECIFICITY = {'product': 0, 'category': 1, 'all': 2}
SOURCE_RANK = {'dynamic_rule': 0, 'flash_sale': 1}

DEFAULT_FLASH_SALE_PRIORITY = 100


def calculate_discount(discount_type, discount_value, base):
    """
    Discount for a base amount: a percentage of it, or a fixed amount.
    Never exceeds the base and never goes negative.
    """
    base = to_decimal(base)
    value = to_decimal(discount_value)
    if base <= ZERO or value <= ZERO:
        return ZERO

    if discount_type == 'percentage':
        discount = base * min(value, Decimal('100')) / Decimal('100')
    elif discount_type == 'fixed':
        discount = value
    else:
        return ZERO

    return min(discount, base)


@dataclass(frozen=True)
class PricingCandidate:
    """A rule or flash sale reduced to what selection needs"""
    source: str
    id: int
    name: str
    discount_type: str
    discount_value: Decimal
    applies_to: str = 'all'
    applies_to_ids: Tuple[str, ...] = ()
    priority: int = 0
    is_active: bool = True
    starts_at: Optional[object] = None
    ends_at: Optional[object] = None
    condition: Condition = field(default_factory=Always)
    rule_type: str = ''

    def is_live(self, now):
        if not self.is_active:
            return False
        if self.starts_at is not None and now < self.starts_at:
            return False
        if self.ends_at is not None and now > self.ends_at:
            return False
        return True

    def sort_key(self):
        return (
            -self.priority,
            SCOPE_SPECIFICITY.get(self.applies_to, len(SCOPE_SPECIFICITY)),
            SOURCE_RANK.get(self.source, len(SOURCE_RANK)),
            self.id,
        )


@dataclass(frozen=True)
class AppliedPricingRule:
    source: str
    rule_id: int
    name: str
    rule_type: str
    discount_type: str
    discount_value: Decimal
    applies_to: str
    priority: int
    matched_subtotal: Decimal
    discount: Decimal

    def as_dict(self):
        return {
            'id': self.rule_id,
            'source': self.source,
            'name': self.name,
            'ruleType': self.rule_type,
            'discountType': self.discount_type,
            'discountValue': self.discount_value,
            'appliesTo': self.applies_to,
            'priority': self.priority,
            'matchedSubtotal': self.matched_subtotal,
            'discount': self.discount,
        }


class PricingRuleRepository:
    """Reads candidate rules and flash sales from the database"""

    @staticmethod
    def active_rules():
        from apps.pricing.models import DynamicPricingRule

        candidates = []
        for rule in DynamicPricingRule.objects.filter(is_active=True).order_by('-priority', 'id'):
            candidate = rule.as_candidate()
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    @staticmethod
    def active_flash_sales():
        from apps.pricing.models import FlashSale

        priority = getattr(settings, 'CHECKOUT_PRICING', {}).get('FLASH_SALE_PRIORITY', DEFAULT_FLASH_SALE_PRIORITY)
        return [sale.as_candidate(priority) for sale in FlashSale.objects.filter(is_active=True).order_by('id')]


class PricingRuleResolver:
    """Picks the single best automatic discount for a cart"""

    @staticmethod
    def select_applicable_rule(cart, now=None, rules=None, flash_sales=None) -> Optional[AppliedPricingRule]:
        """
        Return the winning rule for ``cart`` at ``now`` or None.

        ``rules`` and ``flash_sales`` are candidate lists; when omitted they
        are read from the database.
        """
        now = now or timezone.now()
        if rules is None:
            rules = PricingRuleRepository.active_rules()
        if flash_sales is None:
            flash_sales = PricingRuleRepository.active_flash_sales()

        eligible = []
        for candidate in list(rules) + list(flash_sales):
            if not candidate.is_live(now):
                continue

            matched_lines = cart.lines_in_scope(candidate.applies_to, candidate.applies_to_ids)
            if not matched_lines:
                continue

            try:
                holds = candidate.condition.evaluate(cart)
            except (ConditionError, TypeError, KeyError) as e:
                logger.warning(f"Skipping {candidate.source} {candidate.id}: condition failed to evaluate: {e}")
                continue
            if not holds:
                continue

            eligible.append((candidate, matched_lines))

        if not eligible:
            return None

        candidate, matched_lines = min(eligible, key=lambda item: item[0].sort_key())
        matched_subtotal = sum((line.line_total for line in matched_lines), ZERO)

        return AppliedPricingRule(
            source=candidate.source,
            rule_id=candidate.id,
            name=candidate.name,
            rule_type=candidate.rule_type,
            discount_type=candidate.discount_type,
            discount_value=candidate.discount_value,
            applies_to=candidate.applies_to,
            priority=candidate.priority,
            matched_subtotal=matched_subtotal,
            discount=calculate_discount(candidate.discount_type, candidate.discount_value, matched_subtotal),
        )


def build_candidate(source, id, name, discount_type, discount_value, conditions=None, **kwargs):
    """
    Build a PricingCandidate, parsing stored conditions.
    Returns None for an unparsable condition so the rule never applies.
    """
    try:
        condition = parse_condition(conditions)
    except ConditionError as e:
        logger.warning(f"Ignoring {source} {id} ({name}): invalid conditions: {e}")
        return None

    applies_to_ids = tuple(str(value) for value in (kwargs.pop('applies_to_ids', None) or ()))
    return PricingCandidate(
        source=source,
        id=id,
        name=name,
        discount_type=discount_type,
        discount_value=to_decimal(discount_value),
        applies_to_ids=applies_to_ids,
        condition=condition,
        **kwargs,
    )
