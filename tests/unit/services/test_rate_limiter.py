"""TokenBucketRateLimiter unit tests."""

from a11y_analyzer.services.rate_limiter import TokenBucketRateLimiter


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestTokenBucketRateLimiter:
    def test_allows_up_to_max_then_blocks(self) -> None:
        limiter = TokenBucketRateLimiter(max_tokens=2, refill_seconds=60, clock=FakeClock())

        assert limiter.allow_request("10.0.0.1")
        assert limiter.allow_request("10.0.0.1")
        assert not limiter.allow_request("10.0.0.1")
        assert limiter.remaining_tokens("10.0.0.1") == 0

    def test_keys_are_independent(self) -> None:
        limiter = TokenBucketRateLimiter(max_tokens=1, refill_seconds=60, clock=FakeClock())

        assert limiter.allow_request("a")
        assert limiter.allow_request("b")
        assert not limiter.allow_request("a")

    def test_tokens_refill_over_time(self) -> None:
        clock = FakeClock()
        limiter = TokenBucketRateLimiter(max_tokens=2, refill_seconds=60, clock=clock)
        limiter.allow_request("a")
        limiter.allow_request("a")

        clock.now += 30

        assert limiter.allow_request("a")

    def test_reset_time(self) -> None:
        clock = FakeClock()
        limiter = TokenBucketRateLimiter(max_tokens=2, refill_seconds=60, clock=clock)

        assert limiter.reset_time("unknown") == 0
        limiter.allow_request("a")
        clock.now += 10
        assert limiter.reset_time("a") == 20

    def test_unknown_key_has_full_bucket(self) -> None:
        limiter = TokenBucketRateLimiter(max_tokens=5, refill_seconds=60, clock=FakeClock())
        assert limiter.remaining_tokens("new") == 5

    def test_refilled_buckets_are_pruned_when_keys_reach_the_cap(self) -> None:
        clock = FakeClock()
        limiter = TokenBucketRateLimiter(max_tokens=2, refill_seconds=60, clock=clock, max_keys=3)
        for ip in ("10.0.0.1", "10.0.0.2", "10.0.0.3"):
            limiter.allow_request(ip)

        clock.now += 60
        assert limiter.allow_request("10.0.0.4")

        assert len(limiter._buckets) == 1
        assert limiter.remaining_tokens("10.0.0.1") == 2

    def test_exhausted_buckets_survive_pruning(self) -> None:
        clock = FakeClock()
        limiter = TokenBucketRateLimiter(max_tokens=1, refill_seconds=60, clock=clock, max_keys=2)
        limiter.allow_request("idle")
        clock.now += 61
        limiter.allow_request("busy")

        assert limiter.allow_request("new")
        assert not limiter.allow_request("busy")
        assert set(limiter._buckets) == {"busy", "new"}
