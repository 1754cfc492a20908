from __future__ import annotations

import random
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for HTTP retry behavior.

    A single attempt by default: the browse session leaves retry decisions to
    the user, so transport retries are opt-in.
    """

    max_attempts: int = 1
    base_delay_s: float = 1.0
    jitter_s: float = 0.3
    retry_statuses: tuple[int, ...] = (429, 500, 502, 503, 504)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    def should_retry(self, attempt_index: int) -> bool:
        return attempt_index < self.max_attempts - 1


def backoff_delay(policy: RetryPolicy, attempt_index: int) -> float:
    """Exponential backoff with jitter, in seconds."""
    delay = policy.base_delay_s * (2**attempt_index)
    delay += random.uniform(0, policy.jitter_s)
    return delay


def backoff_sleep(policy: RetryPolicy, attempt_index: int) -> None:
    """Sleep with exponential backoff and jitter."""
    time.sleep(backoff_delay(policy, attempt_index))


class RateLimiter:
    """Simple fixed-delay rate limiter."""

    def __init__(self, delay_ms: int):
        self.delay_s = max(0, delay_ms) / 1000.0

    def sleep(self) -> None:
        """Sleep for the configured delay."""
        if self.delay_s > 0:
            time.sleep(self.delay_s)
