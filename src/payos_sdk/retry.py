"""
Retry scheduling for the payOS client.

Server timing hints (``retry-after``, ``x-ratelimit-reset``) are honoured
when they fall inside ``[0, max_hint)``; otherwise the delay is an
exponential backoff with jitter:

    min(initial_delay * 2 ** attempt, max_delay) * uniform(1 - jitter, 1)
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from email.utils import parsedate_to_datetime
from typing import Callable, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff configuration.

    Attributes:
        initial_delay: Delay for the first retry in seconds
        max_delay: Cap on the backoff delay in seconds
        jitter: Fraction of the delay that may be shaved off at random
        max_hint: Server hints at or above this many seconds are ignored
    """

    initial_delay: float = 0.5
    max_delay: float = 10.0
    jitter: float = 0.25
    max_hint: float = 60.0

    def backoff_delay(self, attempt: int, rand: Callable[[], float] = random.random) -> float:
        """Exponential backoff for the given 0-based retry number."""
        delay = min(self.initial_delay * (2 ** attempt), self.max_delay)
        return delay * (1 - rand() * self.jitter)

    def retry_delay(
        self,
        attempt: int,
        headers: Optional[Mapping[str, str]] = None,
        now: Optional[float] = None,
    ) -> float:
        """Seconds to wait before the next attempt.

        Args:
            attempt: Number of retries already performed
            headers: Response headers of the failed attempt, if any
            now: Current epoch time, for tests

        Returns:
            Delay in seconds
        """
        hint = parse_retry_hint(headers, now=now) if headers is not None else None
        if hint is not None and 0 <= hint < self.max_hint:
            return hint
        if hint is not None:
            logger.debug("Ignoring out-of-range retry hint of %.2fs", hint)
        return self.backoff_delay(attempt)


DEFAULT_RETRY_POLICY = RetryPolicy()


def should_retry_status(status: int) -> bool:
    """Request timeout, rate limiting and server errors are retryable."""
    return status == 408 or status == 429 or status >= 500


def _parse_float(value: str) -> Optional[float]:
    try:
        return float(value)
    except ValueError:
        return None


def parse_retry_hint(headers: Mapping[str, str], now: Optional[float] = None) -> Optional[float]:
    """Extract a server supplied delay in seconds.

    ``retry-after`` may be a number of seconds or an HTTP date;
    ``x-ratelimit-reset`` is an epoch timestamp in seconds and wins when both
    are present.
    """
    now = time.time() if now is None else now
    delay: Optional[float] = None

    retry_after = headers.get("retry-after")
    if retry_after:
        seconds = _parse_float(retry_after)
        if seconds is not None:
            delay = seconds
        else:
            try:
                delay = parsedate_to_datetime(retry_after).timestamp() - now
            except (TypeError, ValueError):
                delay = None

    rate_limit_reset = headers.get("x-ratelimit-reset")
    if rate_limit_reset:
        reset_at = _parse_float(rate_limit_reset)
        if reset_at is not None:
            delay = reset_at - now

    return delay


__all__ = [
    "RetryPolicy",
    "DEFAULT_RETRY_POLICY",
    "should_retry_status",
    "parse_retry_hint",
]
