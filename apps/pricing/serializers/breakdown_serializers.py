"""
Output serializers for priced breakdowns.
"""
from rest_framework import serializers


class OrderBreakdownSerializer(serializers.Serializer):
    """Renders an OrderBreakdown with the storefront's camelCase keys"""

    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2)
    couponDiscount = serializers.DecimalField(source='coupon_discount', max_digits=14, decimal_places=2)
    giftWrapCost = serializers.DecimalField(source='gift_wrap_cost', max_digits=14, decimal_places=2)
    shippingCost = serializers.DecimalField(source='shipping_cost', max_digits=14, decimal_places=2)
    taxableAmount = serializers.DecimalField(source='taxable_amount', max_digits=14, decimal_places=2)
    tax = serializers.DecimalField(max_digits=14, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    hasFreeShipping = serializers.BooleanField(source='has_free_shipping')
    amountToFreeShipping = serializers.DecimalField(source='amount_to_free_shipping', max_digits=14, decimal_places=2)
