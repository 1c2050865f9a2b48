"""
Pricing views module.
"""
from .total_views import ComputeTotalView
from .rule_views import ApplicableRuleView

__all__ = [
    'ComputeTotalView',
    'ApplicableRuleView',
]
