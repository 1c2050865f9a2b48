from rest_framework import serializers


class RateLimitCheckSerializer(serializers.Serializer):
    """Serializer for rate limit check requests"""

    identifier = serializers.CharField(max_length=191)
    endpoint = serializers.CharField(max_length=191)
    maxRequests = serializers.IntegerField(min_value=1, max_value=10000, default=60)
    windowMinutes = serializers.IntegerField(min_value=1, max_value=1440, default=1)
