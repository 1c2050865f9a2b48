"""
Payment views module.

All views are exported from this module to maintain backward compatibility.
"""
from .payment_order_views import (
    CreatePaymentOrderView,
    VerifyPaymentView,
    PaymentOrderDetailView,
    CancelPaymentOrderView,
)

__all__ = [
    'CreatePaymentOrderView',
    'VerifyPaymentView',
    'PaymentOrderDetailView',
    'CancelPaymentOrderView',
]
