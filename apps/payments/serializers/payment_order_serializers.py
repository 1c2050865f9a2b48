"""
Payment order serializers.
"""
from collections.abc import Mapping

from rest_framework import serializers

from apps.common.validators import validate_positive_amount
from ..models import PaymentOrder


class CreateOrderSerializer(serializers.Serializer):
    """Serializer for provider order creation"""

    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField(max_length=3, required=False, allow_blank=True)
    receipt = serializers.CharField(max_length=40, required=False, allow_blank=True)

    def validate_amount(self, value):
        return validate_positive_amount(value)

    def validate_currency(self, value):
        value = value.strip().upper()
        if value and (len(value) != 3 or not value.isalpha()):
            raise serializers.ValidationError("Currency must be a three letter ISO code.")
        return value


class VerifyPaymentSerializer(serializers.Serializer):
    """
    Serializer for payment verification.

    Accepts the storefront's camelCase names as well as the provider's
    checkout handler names (razorpay_order_id, ...).
    """

    ALIASES = {
        'orderId': 'razorpay_order_id',
        'paymentId': 'razorpay_payment_id',
        'signature': 'razorpay_signature',
    }

    orderId = serializers.CharField(trim_whitespace=False)
    paymentId = serializers.CharField(trim_whitespace=False)
    signature = serializers.CharField(trim_whitespace=False)

    def to_internal_value(self, data):
        if not isinstance(data, Mapping):
            return super().to_internal_value(data)
        data = data.dict() if hasattr(data, 'dict') else dict(data)
        for name, alias in self.ALIASES.items():
            if data.get(name) in (None, '') and alias in data:
                data[name] = data[alias]
        return super().to_internal_value(data)


class PaymentOrderSerializer(serializers.ModelSerializer):
    """Public view of a payment order"""

    orderId = serializers.CharField(source='provider_order_id', read_only=True)
    paymentId = serializers.CharField(source='payment_id', read_only=True)
    amountMajor = serializers.DecimalField(source='amount_major', max_digits=14, decimal_places=2, read_only=True)
    couponCode = serializers.CharField(source='coupon.code', read_only=True, default=None)
    couponDiscount = serializers.DecimalField(source='coupon_discount', max_digits=10, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    paidAt = serializers.DateTimeField(source='paid_at', read_only=True)

    class Meta:
        model = PaymentOrder
        fields = [
            'orderId', 'receipt', 'amount', 'amountMajor', 'currency', 'status',
            'paymentId', 'couponCode', 'couponDiscount', 'createdAt', 'paidAt'
        ]
        read_only_fields = fields
