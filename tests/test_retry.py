"""Tests for retry scheduling."""

from __future__ import annotations

import pytest

from payos_sdk.retry import RetryPolicy, parse_retry_hint, should_retry_status

NOW = 1_700_000_000.0


class TestShouldRetryStatus:
    @pytest.mark.parametrize("status", [408, 429, 500, 502, 503, 504])
    def test_retryable(self, status):
        assert should_retry_status(status)

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 422])
    def test_not_retryable(self, status):
        assert not should_retry_status(status)


class TestBackoff:
    def test_grows_exponentially(self):
        policy = RetryPolicy()
        assert policy.backoff_delay(0, rand=lambda: 0.0) == 0.5
        assert policy.backoff_delay(1, rand=lambda: 0.0) == 1.0
        assert policy.backoff_delay(2, rand=lambda: 0.0) == 2.0

    def test_is_capped(self):
        assert RetryPolicy().backoff_delay(10, rand=lambda: 0.0) == 10.0

    def test_jitter_shaves_at_most_a_quarter(self):
        assert RetryPolicy().backoff_delay(1, rand=lambda: 1.0) == 0.75

    def test_random_delay_stays_in_range(self):
        policy = RetryPolicy()
        for attempt in range(5):
            nominal = min(0.5 * 2 ** attempt, 10.0)
            delay = policy.backoff_delay(attempt)
            assert nominal * 0.75 <= delay <= nominal


class TestRetryHints:
    def test_retry_after_seconds(self):
        assert parse_retry_hint({"retry-after": "2"}, now=NOW) == 2.0

    def test_retry_after_http_date(self):
        # 1_700_000_030 is 2023-11-14 22:13:50 UTC
        hint = parse_retry_hint({"retry-after": "Tue, 14 Nov 2023 22:13:50 GMT"}, now=NOW)
        assert hint == pytest.approx(30.0)

    def test_rate_limit_reset_is_epoch_seconds(self):
        assert parse_retry_hint({"x-ratelimit-reset": str(NOW + 5)}, now=NOW) == pytest.approx(5.0)

    def test_rate_limit_reset_wins(self):
        headers = {"retry-after": "2", "x-ratelimit-reset": str(NOW + 7)}
        assert parse_retry_hint(headers, now=NOW) == pytest.approx(7.0)

    def test_garbage_is_ignored(self):
        assert parse_retry_hint({"retry-after": "soon"}, now=NOW) is None
        assert parse_retry_hint({}, now=NOW) is None

    def test_hint_in_range_is_used(self):
        assert RetryPolicy().retry_delay(0, {"retry-after": "2"}, now=NOW) == 2.0

    def test_zero_hint_is_used(self):
        assert RetryPolicy().retry_delay(3, {"retry-after": "0"}, now=NOW) == 0.0

    @pytest.mark.parametrize("value", ["60", "120", "-1"])
    def test_out_of_range_hint_falls_back_to_backoff(self, value):
        delay = RetryPolicy().retry_delay(0, {"retry-after": value}, now=NOW)
        assert 0.375 <= delay <= 0.5
