"""
Payment models module.

All models are exported from this module to maintain backward compatibility.
"""
from .payment_order import PaymentOrder
from .verification_log import PaymentVerificationLog

__all__ = [
    'PaymentOrder',
    'PaymentVerificationLog',
]
