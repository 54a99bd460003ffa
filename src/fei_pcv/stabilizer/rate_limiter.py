"""Replenishing mint buffer."""

from ..base.chain import Chain
from ..types import InvalidParameter, MAX_RATE_LIMIT_PER_SECOND, RateLimitExceeded


class RateLimiter:
    """
    Token-bucket allowance for FEI minting.

    The buffer refills linearly at `rate_limit_per_second` up to
    `buffer_cap`. Replenishment is computed from the chain clock when the
    buffer is read; nothing runs in the background.
    """

    def __init__(
        self,
        chain: Chain,
        rate_limit_per_second: int,
        buffer_cap: int,
        max_rate_limit_per_second: int = MAX_RATE_LIMIT_PER_SECOND,
    ):
        if rate_limit_per_second > max_rate_limit_per_second:
            raise InvalidParameter("RateLimited: rateLimitPerSecond too high")
        self.chain = chain
        self.max_rate_limit_per_second = max_rate_limit_per_second
        self.rate_limit_per_second = rate_limit_per_second
        self.buffer_cap = buffer_cap
        self.buffer_stored = buffer_cap
        self.last_buffer_used_time = chain.timestamp

    def buffer(self) -> int:
        elapsed = self.chain.timestamp - self.last_buffer_used_time
        return min(self.buffer_stored + self.rate_limit_per_second * elapsed, self.buffer_cap)

    def deplete(self, amount: int) -> int:
        """Consume `amount` from the buffer and return what is left."""
        current = self.buffer()
        if amount > current:
            raise RateLimitExceeded("RateLimited: rate limit hit")
        self.buffer_stored = current - amount
        self.last_buffer_used_time = self.chain.timestamp
        return self.buffer_stored

    def _checkpoint(self) -> None:
        self.buffer_stored = self.buffer()
        self.last_buffer_used_time = self.chain.timestamp

    def set_rate_limit_per_second(self, rate_limit_per_second: int) -> None:
        if rate_limit_per_second > self.max_rate_limit_per_second:
            raise InvalidParameter("RateLimited: rateLimitPerSecond too high")
        if rate_limit_per_second < 0:
            raise InvalidParameter("RateLimited: rateLimitPerSecond negative")
        self._checkpoint()
        self.rate_limit_per_second = rate_limit_per_second

    def set_buffer_cap(self, buffer_cap: int) -> None:
        if buffer_cap < 0:
            raise InvalidParameter("RateLimited: bufferCap negative")
        self._checkpoint()
        self.buffer_cap = buffer_cap
        self.buffer_stored = min(self.buffer_stored, buffer_cap)
