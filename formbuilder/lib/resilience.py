"""Retry policy for storage calls that cross the network.

Local and in-memory backends never retry; the S3 backend wraps every
request in :func:`retry_operation` so throttling and 5xx responses do not
lose a save.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Tuple, Type

import tenacity
from tenacity.wait import wait_base

logger = logging.getLogger(__name__)

__all__ = ["RetryConfig", "retry_operation"]


@dataclass
class RetryConfig:
    """How often, and how patiently, a failing call is repeated.

    Attributes:
        max_attempts: Total tries including the first one
        backoff_seconds: Base delay between tries
        exponential: Double the delay after every failure
        jitter: Add up to half the base delay at random
        retry_exceptions: Exception types worth another try
    """

    max_attempts: int = 3
    backoff_seconds: float = 0.5
    exponential: bool = True
    jitter: bool = True
    retry_exceptions: Tuple[Type[BaseException], ...] = (Exception,)

    @classmethod
    def none(cls) -> "RetryConfig":
        """Single attempt."""
        return cls(max_attempts=1)

    @classmethod
    def default(cls) -> "RetryConfig":
        return cls()

    def wait_strategy(self) -> wait_base:
        """Build the tenacity wait for this policy."""
        strategy: wait_base
        if self.exponential:
            strategy = tenacity.wait_exponential(
                multiplier=self.backoff_seconds, min=self.backoff_seconds
            )
        else:
            strategy = tenacity.wait_fixed(self.backoff_seconds)
        if self.jitter:
            strategy = strategy + tenacity.wait_random(0, self.backoff_seconds / 2)
        return strategy


def retry_operation(
    operation: Callable[[], Any],
    config: RetryConfig,
    operation_name: str = "operation",
) -> Any:
    """Run ``operation`` under ``config``, re-raising the last error.

    Args:
        operation: Zero-argument callable
        config: Retry policy
        operation_name: Used in log messages, e.g. "s3 put"

    Returns:
        Whatever ``operation`` returns
    """

    def log_retry(state: tenacity.RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        delay = state.next_action.sleep if state.next_action else 0
        logger.warning(
            "%s failed on attempt %d of %d (%s); retrying in %.1fs",
            operation_name,
            state.attempt_number,
            config.max_attempts,
            error,
            delay,
        )

    retrying = tenacity.Retrying(
        stop=tenacity.stop_after_attempt(config.max_attempts),
        wait=config.wait_strategy(),
        retry=tenacity.retry_if_exception_type(config.retry_exceptions),
        before_sleep=log_retry,
        reraise=True,
    )

    try:
        return retrying(operation)
    except config.retry_exceptions:
        if config.max_attempts > 1:
            logger.error("%s gave up after %d attempts", operation_name, config.max_attempts)
        raise
