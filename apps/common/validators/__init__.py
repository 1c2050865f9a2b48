"""
Common validators module.
"""
from .price_validators import (
    validate_price_range, validate_positive_amount, validate_quantity, validate_discount_value
)

__all__ = [
    'validate_price_range',
    'validate_positive_amount',
    'validate_quantity',
    'validate_discount_value',
]
