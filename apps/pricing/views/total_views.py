"""
Order total calculator endpoint.
"""
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.common.utils import CorsPreflightMixin, error_response
from ..serializers import OrderTotalRequestSerializer, OrderBreakdownSerializer
from ..services import compute_total


class ComputeTotalView(CorsPreflightMixin, APIView):
    """Price a (subtotal, coupon discount, gift wrap) triple"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = OrderTotalRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid amount", serializer.errors)

        data = serializer.validated_data
        breakdown = compute_total(data['subtotal'], data['couponDiscount'], data['giftWrapCost'])
        return Response(OrderBreakdownSerializer(breakdown).data)
