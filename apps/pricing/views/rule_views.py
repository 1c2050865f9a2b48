"""
Pricing rule endpoints.
"""
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.common.money import ZERO
from apps.common.utils import CorsPreflightMixin, error_response
from ..serializers import CartSerializer
from ..services import PricingRuleResolver


class ApplicableRuleView(CorsPreflightMixin, APIView):
    """Return the automatic discount the cart qualifies for, if any"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CartSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid cart", serializer.errors)

        cart = CartSerializer.build_cart(serializer.validated_data['items'])
        applied = PricingRuleResolver.select_applicable_rule(cart)

        return Response({
            'rule': applied.as_dict() if applied else None,
            'discount': applied.discount if applied else ZERO,
        })
