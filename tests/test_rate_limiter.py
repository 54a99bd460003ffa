"""Tests for the replenishing mint buffer."""

import pytest

from fei_pcv.stabilizer.rate_limiter import RateLimiter
from fei_pcv.types import InvalidParameter, RateLimitExceeded


@pytest.fixture
def limiter(chain) -> RateLimiter:
    return RateLimiter(chain, rate_limit_per_second=10, buffer_cap=1_000, max_rate_limit_per_second=100)


class TestRateLimiter:
    def test_starts_full(self, limiter: RateLimiter):
        assert limiter.buffer() == 1_000

    def test_deplete(self, limiter: RateLimiter):
        assert limiter.deplete(400) == 600
        assert limiter.buffer() == 600

    def test_deplete_beyond_buffer(self, limiter: RateLimiter):
        with pytest.raises(RateLimitExceeded, match="RateLimited: rate limit hit"):
            limiter.deplete(1_001)
        assert limiter.buffer() == 1_000

    def test_replenishes_over_time(self, chain, limiter: RateLimiter):
        limiter.deplete(1_000)
        chain.advance_time(30)
        assert limiter.buffer() == 300
        chain.advance_time(1_000)
        assert limiter.buffer() == 1_000

    def test_rate_limit_too_high(self, limiter: RateLimiter):
        with pytest.raises(InvalidParameter, match="RateLimited: rateLimitPerSecond too high"):
            limiter.set_rate_limit_per_second(101)

    def test_rate_change_checkpoints_buffer(self, chain, limiter: RateLimiter):
        limiter.deplete(1_000)
        chain.advance_time(10)
        limiter.set_rate_limit_per_second(50)
        # 100 accrued at the old rate, then 50/s from here
        chain.advance_time(2)
        assert limiter.buffer() == 200

    def test_lower_cap_clamps_buffer(self, limiter: RateLimiter):
        limiter.set_buffer_cap(300)
        assert limiter.buffer() == 300
        assert limiter.buffer_cap == 300
