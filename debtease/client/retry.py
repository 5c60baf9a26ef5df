"""Exponential backoff policy for the API client."""

import random
from dataclasses import dataclass

from debtease.config import settings


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 4  # Including the first try
    base_delay: float = 1.0  # Seconds
    max_delay: float = 5.0
    jitter: float = 0.0  # Up to this fraction of the delay is added at random

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_attempts=settings.retry_max_attempts,
            base_delay=settings.retry_base_delay,
            max_delay=settings.retry_max_delay,
        )

    def can_retry(self, attempt: int) -> bool:
        """``attempt`` is zero-based: attempt 0 is the first try."""
        return attempt + 1 < self.max_attempts

    def delay_for(self, attempt: int, max_delay: float | None = None) -> float:
        """Seconds to wait before retrying after ``attempt`` failed.

        base * 2**attempt, capped at ``max_delay``, plus optional jitter.
        """
        cap = self.max_delay if max_delay is None else max_delay
        delay = min(self.base_delay * 2 ** attempt, cap)
        if self.jitter:
            delay += random.uniform(0, delay * self.jitter)
        return delay
