"""Rate limiter — token bucket for scan-triggering requests."""

import time
from collections import defaultdict
from typing import Callable, Optional

from a11y_analyzer.config import get_settings


class TokenBucketRateLimiter:
    """In-memory token bucket rate limiter.

    Buckets live in process memory, so limits are per worker.
    """

    def __init__(
        self,
        max_tokens: Optional[int] = None,
        refill_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.time,
        max_keys: int = 10_000,
    ):
        settings = get_settings()
        self.max_tokens = max_tokens or settings.RATE_LIMIT_MAX_SCANS
        self.refill_seconds = refill_seconds or settings.RATE_LIMIT_WINDOW_SECONDS
        self._clock = clock
        self.max_keys = max_keys
        self._buckets: dict = defaultdict(
            lambda: {"tokens": self.max_tokens, "last_refill": self._clock()}
        )

    def allow_request(self, key: str = "global") -> bool:
        """Check if a request is allowed and consume a token.

        Args:
            key: Rate limit key (e.g., client IP or "global")

        Returns:
            True if request is allowed, False if rate limited
        """
        now = self._clock()
        if key not in self._buckets and len(self._buckets) >= self.max_keys:
            self._prune(now)

        bucket = self._buckets[key]

        elapsed = now - bucket["last_refill"]
        tokens_to_add = int(elapsed / self.refill_seconds * self.max_tokens)

        if tokens_to_add > 0:
            bucket["tokens"] = min(self.max_tokens, bucket["tokens"] + tokens_to_add)
            bucket["last_refill"] = now

        if bucket["tokens"] > 0:
            bucket["tokens"] -= 1
            return True

        return False

    def _prune(self, now: float) -> None:
        """Drop buckets that have refilled completely; they match a fresh bucket."""
        full = [
            key
            for key, bucket in self._buckets.items()
            if bucket["tokens"] + (now - bucket["last_refill"]) / self.refill_seconds * self.max_tokens >= self.max_tokens
        ]
        for key in full:
            del self._buckets[key]

    def remaining_tokens(self, key: str = "global") -> int:
        """Get remaining tokens for a key without consuming."""
        bucket = self._buckets.get(key)
        if bucket is None:
            return self.max_tokens
        return bucket["tokens"]

    def reset_time(self, key: str = "global") -> float:
        """Get seconds until next token refill."""
        bucket = self._buckets.get(key)
        if bucket is None:
            return 0
        elapsed = self._clock() - bucket["last_refill"]
        return max(0, self.refill_seconds / self.max_tokens - elapsed)
