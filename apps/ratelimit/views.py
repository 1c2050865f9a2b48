from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.common.exceptions import RateLimitExceeded
from apps.common.security import SecurityAuditLogger
from apps.common.utils import CorsPreflightMixin, error_response, get_client_ip
from .serializers import RateLimitCheckSerializer
from .services import DatabaseRateLimiter


class CheckRateLimitView(CorsPreflightMixin, APIView):
    """Count a request for (identifier, endpoint) and report whether it is allowed"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RateLimitCheckSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid rate limit request", serializer.errors)

        data = serializer.validated_data
        decision = DatabaseRateLimiter().check(
            identifier=data['identifier'],
            endpoint=data['endpoint'],
            max_requests=data['maxRequests'],
            window_seconds=data['windowMinutes'] * 60,
        )

        if not decision.allowed:
            SecurityAuditLogger.log_rate_limit_exceeded(
                identifier=data['identifier'],
                endpoint=data['endpoint'],
                ip_address=get_client_ip(request),
            )
            raise RateLimitExceeded(wait=decision.retry_after)

        return Response({'allowed': True, 'remaining': decision.remaining})
