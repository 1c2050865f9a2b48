from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.common.utils import CorsPreflightMixin, error_response
from .serializers import CheckoutQuoteSerializer, CheckoutPlaceSerializer
from .services import CheckoutService


class CheckoutQuoteView(CorsPreflightMixin, APIView):
    """Price a cart with the best available discount"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CheckoutQuoteSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid checkout request", serializer.errors)

        data = serializer.validated_data
        quote = CheckoutService.quote(
            CheckoutQuoteSerializer.build_cart(data['items']),
            user=request.user,
            coupon_code=data.get('couponCode') or None,
            gift_wrap=data['giftWrap'],
        )
        return Response(quote.as_dict())


class CheckoutPlaceView(CorsPreflightMixin, APIView):
    """Price a cart and create the payment order for its total"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CheckoutPlaceSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid checkout request", serializer.errors)

        data = serializer.validated_data
        result = CheckoutService.place(
            CheckoutPlaceSerializer.build_cart(data['items']),
            user=request.user,
            coupon_code=data.get('couponCode') or None,
            gift_wrap=data['giftWrap'],
            currency=data.get('currency') or None,
            receipt=data.get('receipt') or None,
        )
        return Response({
            'quote': result['quote'].as_dict(),
            'order': result['order'],
        })
