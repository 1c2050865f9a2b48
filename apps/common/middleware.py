"""
Middleware for rate limiting, security headers and API error handling
"""

import logging
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from django.conf import settings

from .security import SecurityAuditLogger
from .utils import get_client_ip, support_reference

logger = logging.getLogger(__name__)


class SecurityMiddleware(MiddlewareMixin):
    """
    Security middleware: server-side rate limiting of mutation endpoints and security headers
    """

    def __init__(self, get_response):
        self.get_response = get_response
        super().__init__(get_response)

    def __call__(self, request):
        # Pre-process security checks
        decision = self._check_rate_limit(request)
        if decision is not None and not decision.allowed:
            return self._rate_limit_response(request, decision)

        # Process request
        response = self.get_response(request)

        # Add security headers
        self._add_security_headers(response)

        return response

    def _match_rate_limit(self, path):
        """Find the configured limit for the first matching path prefix"""
        for path_prefix, limit_config in getattr(settings, 'RATE_LIMITS', {}).items():
            if path.startswith(path_prefix):
                return path_prefix, limit_config
        return None, None

    def _check_rate_limit(self, request):
        """Return a RateLimitDecision for limited paths, None otherwise"""
        if not getattr(settings, 'RATE_LIMIT_ENABLED', True) or request.method == 'OPTIONS':
            return None

        endpoint, rate_limit = self._match_rate_limit(request.path)
        if not rate_limit:
            return None  # No rate limiting for unlisted paths

        from apps.ratelimit.services import DatabaseRateLimiter

        return DatabaseRateLimiter().check(
            identifier=f"ip:{get_client_ip(request)}",
            endpoint=endpoint,
            max_requests=rate_limit['limit'],
            window_seconds=rate_limit['window'],
        )

    def _rate_limit_response(self, request, decision):
        """Return rate limit exceeded response"""
        ip_address = get_client_ip(request)

        SecurityAuditLogger.log_rate_limit_exceeded(
            identifier=f"ip:{ip_address}",
            endpoint=request.path,
            ip_address=ip_address,
        )

        response = JsonResponse({
            'code': 429,
            'error': 'Rate limit exceeded. Please try again later.',
            'message': 'Rate limit exceeded. Please try again later.',
            'allowed': False,
            'remaining': 0,
            'retryAfter': decision.retry_after,
        }, status=429)
        response['Retry-After'] = str(decision.retry_after)
        return response

    def _add_security_headers(self, response):
        """Add security headers to response"""
        # Prevent MIME type sniffing
        response['X-Content-Type-Options'] = 'nosniff'

        # Referrer policy
        response['Referrer-Policy'] = 'strict-origin-when-cross-origin'

        # HSTS (only in production)
        if not getattr(settings, 'DEBUG', True):
            response['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        # Remove server information
        if 'Server' in response:
            del response['Server']


class ErrorHandlingMiddleware(MiddlewareMixin):
    """
    Error handling middleware that prevents information leakage on API paths
    """

    def process_exception(self, request, exception):
        """Handle exceptions securely"""
        reference = support_reference()

        # Log the actual exception for debugging
        logger.error(f"Exception in {request.path} (ref {reference}): {exception}", exc_info=True)

        # Return generic error response without exposing internal details
        if request.path.startswith('/api/'):
            return JsonResponse({
                'code': 500,
                'error': 'Internal server error',
                'reference': reference,
            }, status=500)

        return None  # Let Django handle non-API errors normally
