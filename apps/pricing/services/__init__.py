"""
Pricing services module.

All services are exported from this module to maintain backward compatibility.
"""
from .order_total import PricingPolicy, OrderBreakdown, OrderTotal, compute_total
from .cart import Cart, CartLine
from .conditions import ConditionError, parse_condition
from .rule_resolver import (
    AppliedPricingRule,
    PricingCandidate,
    PricingRuleRepository,
    PricingRuleResolver,
    build_candidate,
    calculate_discount,
)

__all__ = [
    'PricingPolicy',
    'OrderBreakdown',
    'OrderTotal',
    'compute_total',
    'Cart',
    'CartLine',
    'ConditionError',
    'parse_condition',
    'AppliedPricingRule',
    'PricingCandidate',
    'PricingRuleRepository',
    'PricingRuleResolver',
    'build_candidate',
    'calculate_discount',
]
