"""
In-process sliding window rate limiter.

Keeps a timestamp log per (identifier, endpoint) key. Suitable as an
advisory guard inside one process; enforcement across processes is done
by DatabaseRateLimiter.
"""
from collections import deque
import threading
import time


def _monotonic_ms():
    return int(time.monotonic() * 1000)


class SlidingWindowRateLimiter:
    """
    Allow at most ``max_requests`` calls per key within any trailing
    ``window_ms`` interval.

    ``clock`` returns the current time in milliseconds and can be replaced
    in tests.
    """

    def __init__(self, max_requests, window_ms, clock=None):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")
        self.max_requests = max_requests
        self.window_ms = window_ms
        self._clock = clock or _monotonic_ms
        self._requests = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(identifier, endpoint):
        return (identifier, endpoint or '')

    def _live_timestamps(self, key, now):
        """Timestamps for a key still inside the window; empty keys are dropped"""
        timestamps = self._requests.get(key)
        if timestamps is None:
            return None
        cutoff = now - self.window_ms
        while timestamps and timestamps[0] <= cutoff:
            timestamps.popleft()
        if not timestamps:
            del self._requests[key]
            return None
        return timestamps

    def is_allowed(self, identifier, endpoint=None):
        """Record a request and return whether it fits in the window"""
        key = self._key(identifier, endpoint)
        with self._lock:
            now = self._clock()
            timestamps = self._live_timestamps(key, now)
            if timestamps is None:
                self._requests[key] = deque([now])
                return True

            if len(timestamps) >= self.max_requests:
                return False

            timestamps.append(now)
            return True

    def remaining(self, identifier, endpoint=None):
        key = self._key(identifier, endpoint)
        with self._lock:
            timestamps = self._live_timestamps(key, self._clock())
            if timestamps is None:
                return self.max_requests
            return max(0, self.max_requests - len(timestamps))

    def reset_in(self, identifier, endpoint=None):
        """Milliseconds until the oldest recorded request leaves the window"""
        key = self._key(identifier, endpoint)
        with self._lock:
            now = self._clock()
            timestamps = self._live_timestamps(key, now)
            if timestamps is None:
                return 0
            return max(0, timestamps[0] + self.window_ms - now)

    def reset(self, identifier=None, endpoint=None):
        """Forget one key, or everything when no identifier is given"""
        with self._lock:
            if identifier is None:
                self._requests.clear()
            else:
                self._requests.pop(self._key(identifier, endpoint), None)


# Advisory presets for general API calls, authentication and uploads
api_rate_limiter = SlidingWindowRateLimiter(max_requests=30, window_ms=60 * 1000)
auth_rate_limiter = SlidingWindowRateLimiter(max_requests=5, window_ms=5 * 60 * 1000)
upload_rate_limiter = SlidingWindowRateLimiter(max_requests=10, window_ms=60 * 1000)
