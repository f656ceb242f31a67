"""Exponential backoff between failed session refreshes."""

from __future__ import annotations

import time
from collections.abc import Callable

from ..config import (
    ENV_RETRY_MAX_DELAY,
    ENV_RETRY_MIN_DELAY,
    RETRY_MAX_DELAY,
    RETRY_MIN_DELAY,
    env_duration,
)
from ..logging_setup import log


class RetryPolicy:
    """
    Tracks consecutive login failures and the delay to apply before the next one.

    Not thread-safe on its own; SessionManager calls it under its lock.
    """

    def __init__(
        self,
        min_delay: float = RETRY_MIN_DELAY,
        max_delay: float = RETRY_MAX_DELAY,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_delay < min_delay:
            max_delay = min_delay
        self.min_delay = min_delay
        self.max_delay = max_delay
        self.current_delay = min_delay
        self.failure_count = 0
        self.last_failure_time: float | None = None
        self._clock = clock

    @classmethod
    def from_environment(cls, clock: Callable[[], float] = time.monotonic) -> RetryPolicy:
        return cls(
            min_delay=env_duration(ENV_RETRY_MIN_DELAY, RETRY_MIN_DELAY),
            max_delay=env_duration(ENV_RETRY_MAX_DELAY, RETRY_MAX_DELAY),
            clock=clock,
        )

    def should_wait_before_retry(self) -> bool:
        # Window is twice the current delay
        if self.failure_count == 0 or self.last_failure_time is None:
            return False
        return self._clock() - self.last_failure_time < self.current_delay * 2

    def record_failure(self) -> None:
        if self.failure_count > 0:
            self.current_delay = min(self.current_delay * 2, self.max_delay)
        self.failure_count += 1
        self.last_failure_time = self._clock()
        log.warning(
            "Login failure recorded (count: %d, next delay: %.1fs)",
            self.failure_count, self.current_delay,
        )

    def reset(self) -> None:
        if self.failure_count > 0:
            log.info(
                "Login successful, resetting retry state (was %d failures)",
                self.failure_count,
            )
        self.failure_count = 0
        self.current_delay = self.min_delay
