"""
Tests for the in-process and storage-backed rate limiters.
"""
import pytest
from datetime import datetime, timedelta, timezone as dt_timezone
from io import StringIO
from unittest import mock
from hypothesis import given, strategies as st, settings
from django.core.management import call_command
from django.db import DatabaseError

from apps.ratelimit.models import RateLimitWindow
from apps.ratelimit.services import (
    DatabaseRateLimiter,
    SlidingWindowRateLimiter,
    api_rate_limiter,
    auth_rate_limiter,
    upload_rate_limiter,
)

NOW = datetime(2026, 3, 1, 12, 0, 0, 500000, tzinfo=dt_timezone.utc)


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start=1_000_000):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class TestSlidingWindowRateLimiter:

    @given(max_requests=st.integers(min_value=1, max_value=50))
    @settings(max_examples=30)
    def test_exactly_max_requests_allowed_in_window(self, max_requests):
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(max_requests, 60000, clock=clock)

        results = []
        for _ in range(max_requests + 1):
            results.append(limiter.is_allowed('ip:1.2.3.4', '/api/x'))
            clock.advance(10)

        assert results == [True] * max_requests + [False]

    def test_requests_leave_window_after_window_ms(self):
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(2, 1000, clock=clock)

        assert limiter.is_allowed('a')
        clock.advance(400)
        assert limiter.is_allowed('a')
        assert not limiter.is_allowed('a')

        clock.advance(600)  # first request is now exactly window_ms old
        assert limiter.is_allowed('a')
        assert not limiter.is_allowed('a')

    def test_rejected_requests_are_not_counted(self):
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(1, 1000, clock=clock)

        assert limiter.is_allowed('a')
        for _ in range(5):
            clock.advance(100)
            assert not limiter.is_allowed('a')

        clock.advance(500)
        assert limiter.is_allowed('a')

    def test_remaining_and_reset_in(self):
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(3, 1000, clock=clock)

        assert limiter.remaining('a') == 3
        assert limiter.reset_in('a') == 0

        limiter.is_allowed('a')
        clock.advance(250)
        limiter.is_allowed('a')

        assert limiter.remaining('a') == 1
        assert limiter.reset_in('a') == 750

        clock.advance(750)
        assert limiter.remaining('a') == 2
        assert limiter.reset_in('a') == 250

    def test_keys_are_independent(self):
        limiter = SlidingWindowRateLimiter(1, 1000, clock=FakeClock())

        assert limiter.is_allowed('a', '/one')
        assert limiter.is_allowed('a', '/two')
        assert limiter.is_allowed('b', '/one')
        assert not limiter.is_allowed('a', '/one')

    def test_reset(self):
        limiter = SlidingWindowRateLimiter(1, 1000, clock=FakeClock())
        limiter.is_allowed('a')
        limiter.is_allowed('b')

        limiter.reset('a')
        assert limiter.is_allowed('a')
        assert not limiter.is_allowed('b')

        limiter.reset()
        assert limiter.is_allowed('b')

    def test_expired_keys_are_dropped(self):
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(2, 1000, clock=clock)
        for n in range(50):
            limiter.is_allowed(f"ip:10.0.0.{n}", '/api/x')
        assert len(limiter._requests) == 50

        clock.advance(1000)
        for n in range(50):
            assert limiter.remaining(f"ip:10.0.0.{n}", '/api/x') == 2

        assert limiter._requests == {}

        assert limiter.is_allowed('ip:10.0.0.1', '/api/x')
        assert len(limiter._requests) == 1

    @pytest.mark.parametrize('max_requests,window_ms', [(0, 1000), (1, 0), (1, -5)])
    def test_invalid_configuration(self, max_requests, window_ms):
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(max_requests, window_ms)

    def test_presets(self):
        assert (api_rate_limiter.max_requests, api_rate_limiter.window_ms) == (30, 60000)
        assert (auth_rate_limiter.max_requests, auth_rate_limiter.window_ms) == (5, 300000)
        assert (upload_rate_limiter.max_requests, upload_rate_limiter.window_ms) == (10, 60000)


@pytest.mark.django_db
class TestDatabaseRateLimiter:

    def test_limit_enforced_then_released(self):
        limiter = DatabaseRateLimiter(bucket_seconds=1, prune_probability=0)

        decisions = [limiter.check('ip:1.1.1.1', '/api/x', 3, 60, now=NOW) for _ in range(4)]

        assert [d.allowed for d in decisions] == [True, True, True, False]
        assert [d.remaining for d in decisions] == [2, 1, 0, 0]
        assert decisions[3].retry_after == 60

        later = limiter.check('ip:1.1.1.1', '/api/x', 3, 60, now=NOW + timedelta(seconds=61))
        assert later.allowed
        assert later.remaining == 2

    def test_requests_in_same_bucket_share_a_row(self):
        limiter = DatabaseRateLimiter(bucket_seconds=1, prune_probability=0)
        for offset_ms in (0, 100, 300):
            limiter.check('ip:1.1.1.1', '/api/x', 10, 60, now=NOW + timedelta(milliseconds=offset_ms))

        bucket = RateLimitWindow.objects.get()
        assert bucket.request_count == 3
        assert bucket.window_start == NOW.replace(microsecond=0)

    def test_rejected_requests_do_not_increment(self):
        limiter = DatabaseRateLimiter(prune_probability=0)
        for _ in range(5):
            limiter.check('ip:2.2.2.2', '/api/x', 2, 60, now=NOW)

        assert RateLimitWindow.objects.get().request_count == 2

    def test_identifiers_and_endpoints_are_independent(self):
        limiter = DatabaseRateLimiter(prune_probability=0)

        assert limiter.check('ip:1.1.1.1', '/api/a', 1, 60, now=NOW).allowed
        assert limiter.check('ip:1.1.1.1', '/api/b', 1, 60, now=NOW).allowed
        assert limiter.check('ip:3.3.3.3', '/api/a', 1, 60, now=NOW).allowed
        assert not limiter.check('ip:1.1.1.1', '/api/a', 1, 60, now=NOW).allowed

    def test_window_slides_across_buckets(self):
        limiter = DatabaseRateLimiter(bucket_seconds=1, prune_probability=0)

        assert limiter.check('k', '/e', 2, 10, now=NOW).allowed
        assert limiter.check('k', '/e', 2, 10, now=NOW + timedelta(seconds=5)).allowed
        assert not limiter.check('k', '/e', 2, 10, now=NOW + timedelta(seconds=9)).allowed
        # The first bucket has left the window, the second has not
        assert limiter.check('k', '/e', 2, 10, now=NOW + timedelta(seconds=11)).allowed
        assert not limiter.check('k', '/e', 2, 10, now=NOW + timedelta(seconds=12)).allowed

    def test_defaults_from_settings(self, settings):
        settings.RATE_LIMIT_DEFAULT_MAX_REQUESTS = 2
        settings.RATE_LIMIT_DEFAULT_WINDOW_MINUTES = 1
        limiter = DatabaseRateLimiter(prune_probability=0)

        assert limiter.check('k', '/e', now=NOW).remaining == 1
        limiter.check('k', '/e', now=NOW)
        assert limiter.check('k', '/e', now=NOW).retry_after == 60

    def test_prune_deletes_old_buckets(self):
        RateLimitWindow.objects.create(identifier='k', endpoint='/e', window_start=NOW - timedelta(hours=30),
                                       request_count=4)
        RateLimitWindow.objects.create(identifier='k', endpoint='/e', window_start=NOW - timedelta(hours=1),
                                       request_count=1)

        deleted = DatabaseRateLimiter().prune(older_than_hours=24, now=NOW)

        assert deleted == 1
        assert RateLimitWindow.objects.count() == 1

    def test_probabilistic_prune_runs_during_check(self):
        RateLimitWindow.objects.create(identifier='old', endpoint='/e', window_start=NOW - timedelta(days=3),
                                       request_count=1)
        limiter = DatabaseRateLimiter(prune_probability=1.0, retention_hours=24)

        limiter.check('k', '/e', 5, 60, now=NOW)

        assert not RateLimitWindow.objects.filter(identifier='old').exists()

    def test_prune_command(self):
        RateLimitWindow.objects.create(identifier='k', endpoint='/e', window_start=NOW - timedelta(days=2))
        out = StringIO()

        call_command('prune_rate_limits', hours=24, stdout=out)

        assert 'Pruned 1 rate limit windows' in out.getvalue()
        assert RateLimitWindow.objects.count() == 0

    def test_store_failure_fails_open(self):
        limiter = DatabaseRateLimiter(prune_probability=0)
        with mock.patch.object(RateLimitWindow.objects, 'filter', side_effect=DatabaseError('down')):
            decision = limiter.check('k', '/e', 5, 60, now=NOW)

        assert decision.allowed
        assert decision.remaining == 5
