"""
Common utility functions for API responses
"""
import uuid

from rest_framework.response import Response
from rest_framework import status


def error_response(message="Error", errors=None, status_code=status.HTTP_400_BAD_REQUEST, headers=None):
    """
    Standard error response format, same shape as the exception handler output
    """
    response_data = {
        "code": status_code,
        "error": message
    }
    if errors:
        response_data["errors"] = errors
    return Response(response_data, status=status_code, headers=headers)


def support_reference():
    """Short opaque id that support staff can grep the logs for."""
    return uuid.uuid4().hex[:12]


def get_client_ip(request):
    """Get client IP address"""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR', '127.0.0.1')


class CorsPreflightMixin:
    """APIView mixin: answer OPTIONS with an empty 200 instead of DRF metadata."""

    def options(self, request, *args, **kwargs):
        return Response(status=status.HTTP_200_OK)
