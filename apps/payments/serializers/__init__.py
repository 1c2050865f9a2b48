"""
Payment serializers module.
"""
from .payment_order_serializers import CreateOrderSerializer, VerifyPaymentSerializer, PaymentOrderSerializer

__all__ = [
    'CreateOrderSerializer',
    'VerifyPaymentSerializer',
    'PaymentOrderSerializer',
]
