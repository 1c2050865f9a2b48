"""
Payment order and verification endpoints.
"""
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status

from apps.common.utils import CorsPreflightMixin, error_response, get_client_ip
from ..serializers import CreateOrderSerializer, VerifyPaymentSerializer, PaymentOrderSerializer
from ..services import PaymentGatewayService


class CreatePaymentOrderView(CorsPreflightMixin, APIView):
    """Mint a provider order for an amount in major units"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CreateOrderSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid amount", serializer.errors)

        data = serializer.validated_data
        order = PaymentGatewayService.create_order(
            data['amount'],
            currency=data.get('currency') or None,
            receipt=data.get('receipt') or None,
            user=request.user,
        )
        return Response(order)


class VerifyPaymentView(CorsPreflightMixin, APIView):
    """Verify the signed payment callback relayed by the client"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = VerifyPaymentSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Missing required fields", serializer.errors)

        data = serializer.validated_data
        result = PaymentGatewayService.verify_payment(
            data['orderId'],
            data['paymentId'],
            data['signature'],
            request_ip=get_client_ip(request),
        )
        return Response({'verified': result['verified']})


class PaymentOrderDetailView(CorsPreflightMixin, APIView):
    """Current state of a payment order"""
    permission_classes = [AllowAny]

    def get(self, request, order_id):
        payment_order = PaymentGatewayService.get_order(order_id, user=request.user)
        if payment_order is None:
            return error_response("Payment order not found", status_code=status.HTTP_404_NOT_FOUND)
        return Response(PaymentOrderSerializer(payment_order).data)


class CancelPaymentOrderView(CorsPreflightMixin, APIView):
    """Cancel an order that has not been paid"""
    permission_classes = [AllowAny]

    def post(self, request, order_id):
        user = request.user if request.user.is_authenticated else None
        result = PaymentGatewayService.cancel_order(order_id, user=user)
        if not result['success']:
            status_code = status.HTTP_409_CONFLICT if result.get('payment_order') else status.HTTP_404_NOT_FOUND
            return error_response(result['message'], status_code=status_code)
        return Response(PaymentOrderSerializer(result['payment_order']).data)
