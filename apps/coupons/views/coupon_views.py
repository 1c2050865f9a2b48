"""
Coupon endpoints.
"""
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from apps.common.utils import CorsPreflightMixin, error_response
from apps.pricing.serializers import CartSerializer
from ..serializers import CouponSerializer, CouponValidateSerializer, CouponApplySerializer
from ..services import CouponService


class ValidateCouponView(CorsPreflightMixin, APIView):
    """Check whether a coupon code can be used for an order amount"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CouponValidateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid coupon request", serializer.errors)

        data = serializer.validated_data
        cart = CartSerializer.build_cart(data['items']) if data.get('items') else None

        result = CouponService.validate_coupon(
            data['code'],
            data['orderAmount'],
            user=request.user,
            cart=cart,
        )
        return Response(result.as_dict())


class ApplyCouponView(CorsPreflightMixin, APIView):
    """Record a coupon redemption for the authenticated user"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CouponApplySerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid coupon request", serializer.errors)

        data = serializer.validated_data
        result = CouponService.apply_coupon(
            data['couponId'],
            data['orderId'],
            data['discountApplied'],
            user=request.user,
        )
        if not result['success']:
            return error_response(result['message'], status_code=status.HTTP_409_CONFLICT)

        return Response({
            'success': True,
            'message': result['message'],
            'usesCount': result['coupon'].uses_count,
        })


class ActiveCouponsView(CorsPreflightMixin, APIView):
    """List coupons that can currently be redeemed"""
    permission_classes = [AllowAny]

    def get(self, request):
        coupons = CouponService.get_active_coupons()
        return Response(CouponSerializer(coupons, many=True).data)
