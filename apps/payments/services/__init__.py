"""
Payment services module.

All services are exported from this module to maintain backward compatibility.
"""
from .razorpay_client import RazorpayClient
from .gateway_service import PaymentGatewayService, compute_signature, signatures_match, default_receipt

__all__ = [
    'RazorpayClient',
    'PaymentGatewayService',
    'compute_signature',
    'signatures_match',
    'default_receipt',
]
