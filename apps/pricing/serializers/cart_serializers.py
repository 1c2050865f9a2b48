"""
Cart and order total request serializers.
"""
from rest_framework import serializers

from apps.common.validators import validate_price_range, validate_quantity
from ..services import Cart, CartLine


class CartItemSerializer(serializers.Serializer):
    """A single cart line as sent by the storefront"""

    productId = serializers.CharField(max_length=64)
    categoryId = serializers.CharField(max_length=64, required=False, allow_null=True, allow_blank=True)
    unitPrice = serializers.DecimalField(max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField(default=1)

    def validate_unitPrice(self, value):
        return validate_price_range(value)

    def validate_quantity(self, value):
        return validate_quantity(value)


class CartSerializer(serializers.Serializer):
    """Cart payload shared by rule, coupon and checkout endpoints"""

    items = CartItemSerializer(many=True)

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("Cart must contain at least one item.")
        return value

    @staticmethod
    def build_cart(items):
        return Cart(tuple(
            CartLine(
                product_id=item['productId'],
                category_id=item.get('categoryId') or None,
                unit_price=item['unitPrice'],
                quantity=item['quantity'],
            )
            for item in items
        ))


class OrderTotalRequestSerializer(serializers.Serializer):
    """Input of the order total calculator"""

    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    couponDiscount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, default=0)
    giftWrapCost = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, default=0)

    def validate_subtotal(self, value):
        return validate_price_range(value)

    def validate_couponDiscount(self, value):
        return validate_price_range(value)

    def validate_giftWrapCost(self, value):
        return validate_price_range(value)
