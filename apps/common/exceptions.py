"""
Exception taxonomy and the DRF exception handler for consistent API errors.

Business-rule failures (ineligible coupon, no matching pricing rule,
signature mismatch) are returned as result objects and never raised.
Only infrastructure and request problems travel as exceptions.
"""
from rest_framework.views import exception_handler
from rest_framework.exceptions import APIException, Throttled, ValidationError
from rest_framework import status
import logging

logger = logging.getLogger(__name__)

__all__ = [
    'ConfigurationError',
    'ProviderError',
    'RateLimitExceeded',
    'ValidationError',
    'custom_exception_handler',
]


class ConfigurationError(APIException):
    """Required server-side configuration (e.g. provider credentials) is missing."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Service is not configured.'
    default_code = 'not_configured'


class ProviderError(APIException):
    """The upstream payment provider rejected the call or could not be reached."""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Payment provider request failed.'
    default_code = 'provider_error'

    def __init__(self, detail=None, code=None, upstream_status=None):
        super().__init__(detail, code)
        self.upstream_status = upstream_status


class RateLimitExceeded(Throttled):
    """Too many requests for an identifier within the window."""
    default_detail = 'Rate limit exceeded. Please try again later.'
    default_code = 'rate_limited'


def _first_message(detail):
    if isinstance(detail, dict):
        if 'detail' in detail:
            return str(detail['detail'])
        for value in detail.values():
            return _first_message(value)
    if isinstance(detail, (list, tuple)) and detail:
        return _first_message(detail[0])
    return str(detail)


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent error responses:
    ``{"code": <status>, "error": <message>, "errors": <details?>}``
    """
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is None:
        return None

    if response.status_code >= 500:
        logger.error(f"API Exception: {exc}", exc_info=True)
    else:
        logger.warning(f"API Exception: {exc}")

    custom_response_data = {
        'code': response.status_code,
        'error': _first_message(response.data),
    }

    if response.status_code == status.HTTP_400_BAD_REQUEST:
        custom_response_data['errors'] = response.data
    elif response.status_code == status.HTTP_429_TOO_MANY_REQUESTS:
        custom_response_data['error'] = RateLimitExceeded.default_detail
        custom_response_data['message'] = RateLimitExceeded.default_detail
        custom_response_data['allowed'] = False
        custom_response_data['remaining'] = 0
        if getattr(exc, 'wait', None) is not None:
            custom_response_data['retryAfter'] = int(exc.wait)
    elif response.status_code >= 500 and not isinstance(exc, (ConfigurationError, ProviderError)):
        # Don't expose internal errors
        custom_response_data['error'] = 'Internal server error'

    response.data = custom_response_data
    return response
