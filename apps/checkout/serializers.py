from rest_framework import serializers

from apps.pricing.serializers import CartSerializer


class CheckoutQuoteSerializer(CartSerializer):
    """Serializer for checkout quote requests"""

    couponCode = serializers.CharField(max_length=50, required=False, allow_blank=True)
    giftWrap = serializers.BooleanField(required=False, default=False)


class CheckoutPlaceSerializer(CheckoutQuoteSerializer):
    """Serializer for placing a checkout"""

    currency = serializers.CharField(max_length=3, required=False, allow_blank=True)
    receipt = serializers.CharField(max_length=40, required=False, allow_blank=True)
