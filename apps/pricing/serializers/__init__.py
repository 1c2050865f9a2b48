"""
Pricing serializers module.
"""
from .cart_serializers import CartItemSerializer, CartSerializer, OrderTotalRequestSerializer
from .breakdown_serializers import OrderBreakdownSerializer

__all__ = [
    'CartItemSerializer',
    'CartSerializer',
    'OrderTotalRequestSerializer',
    'OrderBreakdownSerializer',
]
