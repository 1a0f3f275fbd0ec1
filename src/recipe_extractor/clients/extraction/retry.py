"""Exponential backoff policy for caller-triggered retries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """How many times to retry after the first try and how long to wait.

    The wait before retry ``n`` (zero-based) is ``base_delay * 2**n``
    seconds, so the defaults make four calls in total, waiting 1s, 2s and
    4s in between.
    """

    max_retries: int = 3
    base_delay: float = 1.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            msg = f"max_retries must not be negative, got {self.max_retries}"
            raise ValueError(msg)
        if self.base_delay < 0:
            msg = f"base_delay must not be negative, got {self.base_delay}"
            raise ValueError(msg)

    @property
    def max_attempts(self) -> int:
        """Total calls made before giving up."""
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after the zero-based ``attempt`` failed."""
        return self.base_delay * 2**attempt

    def should_retry(self, attempt: int) -> bool:
        """Whether another attempt follows the zero-based ``attempt``."""
        return attempt < self.max_retries
