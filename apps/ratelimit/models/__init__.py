"""
Rate limit models module.
"""
from .rate_limit_window import RateLimitWindow

__all__ = [
    'RateLimitWindow',
]
