"""
Storage-backed rate limiter shared by all server processes.
"""
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional
import logging
import random

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F, Sum
from django.utils import timezone

from ..models import RateLimitWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after: Optional[int] = None


class DatabaseRateLimiter:
    """
    Sliding window over fixed-size count buckets.

    Each check sums the buckets that started inside the trailing window.
    Concurrent checks are not serialized, so a burst can overshoot the
    limit by a few requests.
    """

    def __init__(self, bucket_seconds=None, prune_probability=None, retention_hours=None):
        self.bucket_seconds = bucket_seconds or getattr(settings, 'RATE_LIMIT_BUCKET_SECONDS', 1)
        self.prune_probability = (
            prune_probability if prune_probability is not None
            else getattr(settings, 'RATE_LIMIT_PRUNE_PROBABILITY', 0.01)
        )
        self.retention_hours = retention_hours or getattr(settings, 'RATE_LIMIT_RETENTION_HOURS', 24)

    def _bucket_start(self, now):
        epoch = int(now.timestamp())
        return now.replace(microsecond=0) - timedelta(seconds=epoch % self.bucket_seconds)

    def check(self, identifier, endpoint, max_requests=None, window_seconds=None, now=None) -> RateLimitDecision:
        """Count this request against (identifier, endpoint) and decide"""
        if max_requests is None:
            max_requests = getattr(settings, 'RATE_LIMIT_DEFAULT_MAX_REQUESTS', 60)
        if window_seconds is None:
            window_seconds = getattr(settings, 'RATE_LIMIT_DEFAULT_WINDOW_MINUTES', 1) * 60
        now = now or timezone.now()

        try:
            if self.prune_probability and random.random() < self.prune_probability:
                self.prune(now=now)

            cutoff = now - timedelta(seconds=window_seconds)
            used = RateLimitWindow.objects.filter(
                identifier=identifier,
                endpoint=endpoint,
                window_start__gt=cutoff,
            ).aggregate(total=Sum('request_count'))['total'] or 0

            if used >= max_requests:
                return RateLimitDecision(allowed=False, remaining=0, retry_after=int(window_seconds))

            self._increment(identifier, endpoint, self._bucket_start(now))
            return RateLimitDecision(allowed=True, remaining=max(0, max_requests - used - 1))

        except DatabaseError as e:
            # Best-effort throttle: let the request through rather than fail checkout
            logger.error(f"Rate limit store unavailable for {identifier} on {endpoint}: {e}")
            return RateLimitDecision(allowed=True, remaining=max_requests)

    def _increment(self, identifier, endpoint, window_start):
        bucket = RateLimitWindow.objects.filter(
            identifier=identifier,
            endpoint=endpoint,
            window_start=window_start,
        )
        if bucket.update(request_count=F('request_count') + 1):
            return

        try:
            with transaction.atomic():
                RateLimitWindow.objects.create(
                    identifier=identifier,
                    endpoint=endpoint,
                    window_start=window_start,
                    request_count=1,
                )
        except IntegrityError:
            # Another request created the bucket first
            bucket.update(request_count=F('request_count') + 1)

    def prune(self, older_than_hours=None, now=None):
        """Delete buckets older than the retention period, return the count"""
        hours = older_than_hours if older_than_hours is not None else self.retention_hours
        cutoff = (now or timezone.now()) - timedelta(hours=hours)
        deleted, _ = RateLimitWindow.objects.filter(window_start__lt=cutoff).delete()
        if deleted:
            logger.info(f"Pruned {deleted} rate limit windows older than {hours}h")
        return deleted
