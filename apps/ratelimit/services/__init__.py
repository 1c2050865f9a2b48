"""
Rate limiting services module.
"""
from .sliding_window import SlidingWindowRateLimiter, api_rate_limiter, auth_rate_limiter, upload_rate_limiter
from .database_limiter import DatabaseRateLimiter, RateLimitDecision

__all__ = [
    'SlidingWindowRateLimiter',
    'api_rate_limiter',
    'auth_rate_limiter',
    'upload_rate_limiter',
    'DatabaseRateLimiter',
    'RateLimitDecision',
]
