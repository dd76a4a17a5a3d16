"""Bounded retry with a fixed delay between attempts.

An operation is attempted up to ``threshold`` times, sleeping ``delay``
seconds between attempts (never after the last one). A failure whose kind is
outside a configured ``exception_filter`` ends the loop at once, whatever
budget is left.

The policy engine runs once, on the final failure only, never per attempt.

Example:
    >>> from eh.retry import retry, retry_or_raise
    >>>
    >>> ok = retry({"threshold": 5, "delay": 1.0, "logger": sink}, poll_queue)
    >>> if not ok:
    ...     schedule_later()
    >>>
    >>> retry_or_raise(
    ...     {"exception_filter": {ConnectionError}, "message": "upload failed"},
    ...     upload,
    ... )
"""

from __future__ import annotations

import time
from collections.abc import Collection
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Hashable, TypeVar

from eh.config import PolicyConfig
from eh.errors import is_member
from eh.logging import get_logger
from eh.policy import apply_policy
from eh.wrappers import Operation, Options

T = TypeVar("T")

logger = get_logger(__name__)


def utcnow() -> datetime:
    """Return timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class FixedDelay:
    """Constant delay between a bounded number of attempts.

    Attributes:
        max_attempts: Total attempts allowed, including the first one
        delay: Seconds to sleep before each further attempt
        retryable_kinds: Failure kinds worth retrying (None = all)
    """

    max_attempts: int = 3
    delay: float = 0.2
    retryable_kinds: Collection[Hashable] | None = None

    @classmethod
    def from_policy(cls, policy: PolicyConfig) -> FixedDelay:
        return cls(
            max_attempts=policy.threshold,
            delay=policy.delay,
            retryable_kinds=policy.exception_filter,
        )

    def next_delay(self, attempt: int) -> float:
        """Return constant delay."""
        return self.delay

    def is_retryable(self, error: Exception) -> bool:
        """Check the error's kind against ``retryable_kinds``."""
        if self.retryable_kinds is None:
            return True
        return is_member(error, self.retryable_kinds)

    def should_retry(self, attempt: int, error: Exception | None = None) -> bool:
        """Check if another attempt is allowed after ``attempt`` failures."""
        if error is not None and not self.is_retryable(error):
            return False
        return attempt < self.max_attempts


@dataclass
class RetryContext:
    """Context tracking retry state for one bounded-retry loop.

    Example:
        >>> ctx = RetryContext(FixedDelay(max_attempts=3, delay=0.5))
        >>> result = ctx.run(lambda arg: call_api(), None)
        >>> ctx.attempts  # failures so far
        0
    """

    strategy: FixedDelay
    on_retry: Callable[[int, Exception, float], None] | None = None
    sleep: Callable[[float], None] = time.sleep
    attempt: int = field(default=0, init=False)
    last_error: Exception | None = field(default=None, init=False)
    started_at: datetime = field(default_factory=utcnow, init=False)
    errors: list[tuple[int, Exception, datetime]] = field(default_factory=list, init=False)

    @property
    def elapsed_seconds(self) -> float:
        """Total elapsed time since first attempt."""
        return (utcnow() - self.started_at).total_seconds()

    @property
    def attempts(self) -> int:
        """Number of failed attempts counted against the budget."""
        return self.attempt

    def run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Execute function with retry logic.

        Returns:
            Result from the first successful call

        Raises:
            The failure that ended the loop: a filtered-out kind, or the last
            failure once the budget is spent
        """
        while True:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                self.last_error = e

                if not self.strategy.is_retryable(e):
                    logger.debug(
                        "retry_filtered_out",
                        error_type=type(e).__name__,
                        attempts=self.attempt,
                    )
                    raise

                self.attempt += 1
                self.errors.append((self.attempt, e, utcnow()))

                if not self.strategy.should_retry(self.attempt, e):
                    logger.debug(
                        "retry_exhausted",
                        error_type=type(e).__name__,
                        attempts=self.attempt,
                        elapsed_seconds=round(self.elapsed_seconds, 3),
                    )
                    raise

                delay = self.strategy.next_delay(self.attempt)

                if self.on_retry:
                    self.on_retry(self.attempt, e, delay)

                logger.debug(
                    "retry_attempt_failed",
                    error_type=type(e).__name__,
                    attempt=self.attempt,
                    max_attempts=self.strategy.max_attempts,
                    delay=delay,
                )
                self.sleep(delay)


def retry(config: Options, operation: Operation[Any]) -> bool:
    """Attempt ``operation`` up to ``threshold`` times.

    On final failure the policy is applied once and False is returned; no
    operation failure escapes.

    Returns:
        True if an attempt succeeded, else False
    """
    policy = PolicyConfig.coerce(config)
    try:
        RetryContext(FixedDelay.from_policy(policy)).run(operation, policy.joined_args())
    except Exception as e:
        apply_policy(policy, e)
        return False
    return True


def retry_or_raise(config: Options, operation: Operation[T]) -> T:
    """Attempt ``operation`` up to ``threshold`` times, re-raising on final failure.

    The policy is applied once before the final failure is re-raised.

    Returns:
        The result of the first successful attempt
    """
    policy = PolicyConfig.coerce(config)
    try:
        return RetryContext(FixedDelay.from_policy(policy)).run(operation, policy.joined_args())
    except Exception as e:
        # Filtered-out failures land here too: handlers are still notified,
        # only logging is gated by the filter.
        apply_policy(policy, e)
        raise


__all__ = [
    "FixedDelay",
    "RetryContext",
    "retry",
    "retry_or_raise",
]
