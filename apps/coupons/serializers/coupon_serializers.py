"""
Coupon serializers.
"""
from rest_framework import serializers

from apps.common.validators import validate_price_range
from apps.pricing.serializers import CartItemSerializer
from ..models import Coupon


class CouponSerializer(serializers.ModelSerializer):
    """Public view of a coupon"""

    discountType = serializers.CharField(source='discount_type', read_only=True)
    discountValue = serializers.DecimalField(source='discount_value', max_digits=10, decimal_places=2, read_only=True)
    minOrderAmount = serializers.DecimalField(source='min_order_amount', max_digits=10, decimal_places=2, read_only=True)
    expiresAt = serializers.DateTimeField(source='expires_at', read_only=True)

    class Meta:
        model = Coupon
        fields = ['id', 'code', 'description', 'discountType', 'discountValue', 'minOrderAmount', 'expiresAt']


class CouponValidateSerializer(serializers.Serializer):
    """Serializer for coupon validation requests"""

    code = serializers.CharField(max_length=50)
    orderAmount = serializers.DecimalField(max_digits=12, decimal_places=2)
    items = CartItemSerializer(many=True, required=False)

    def validate_code(self, value):
        if not value.strip():
            raise serializers.ValidationError("Coupon code cannot be empty")
        return value.strip()

    def validate_orderAmount(self, value):
        return validate_price_range(value)


class CouponApplySerializer(serializers.Serializer):
    """Serializer for recording a coupon redemption"""

    couponId = serializers.IntegerField()
    orderId = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    discountApplied = serializers.DecimalField(max_digits=10, decimal_places=2)

    def validate_discountApplied(self, value):
        return validate_price_range(value)
