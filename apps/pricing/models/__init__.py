"""
Pricing models module.

All models are exported from this module to maintain backward compatibility.
"""
from .pricing_rule import DynamicPricingRule
from .flash_sale import FlashSale

__all__ = [
    'DynamicPricingRule',
    'FlashSale',
]
