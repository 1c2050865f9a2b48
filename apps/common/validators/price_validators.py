"""
Price, quantity and discount validators.
"""
from rest_framework import serializers
from decimal import Decimal


def validate_price_range(value, min_value=0, max_value=None):
    """
    Validate price is within acceptable range.

    Args:
        value: Price decimal
        min_value: Minimum allowed price (default: 0)
        max_value: Maximum allowed price (optional)

    Raises:
        serializers.ValidationError: If price is outside valid range

    Returns:
        decimal.Decimal: Validated price
    """
    if value < min_value:
        raise serializers.ValidationError(f"Amount must be at least {min_value}.")

    if max_value is not None and value > max_value:
        raise serializers.ValidationError(f"Amount must not exceed {max_value}.")

    return value


def validate_positive_amount(value):
    """
    Validate a payable amount is strictly greater than zero.

    Raises:
        serializers.ValidationError: If amount is zero or negative
    """
    if value is None or value <= 0:
        raise serializers.ValidationError("Invalid amount")
    return value


def validate_quantity(value, min_value=1):
    """
    Validate quantity is positive and meets minimum requirement.

    Args:
        value: Quantity integer
        min_value: Minimum allowed quantity (default: 1)

    Raises:
        serializers.ValidationError: If quantity is invalid

    Returns:
        int: Validated quantity
    """
    if value < min_value:
        raise serializers.ValidationError(f"Quantity must be at least {min_value}.")

    return value


def validate_discount_value(discount_type, discount_value):
    """
    Validate a discount definition.

    Called from DynamicPricingRule.clean() with the rule's own fields.
    Percentages must lie in (0, 100]; fixed amounts must be positive.

    Raises:
        serializers.ValidationError: If the discount is invalid
    """
    if discount_value is None or discount_value <= 0:
        raise serializers.ValidationError({
            'discount_value': 'Discount value must be greater than zero.'
        })

    if discount_type == 'percentage' and discount_value > Decimal('100'):
        raise serializers.ValidationError({
            'discount_value': 'Percentage discount cannot exceed 100.'
        })

    return discount_value
