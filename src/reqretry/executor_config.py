r"""Contain the immutable configuration of a retrying executor."""

from __future__ import annotations

__all__ = ["ExecutorConfig"]

from dataclasses import dataclass

import httpx

from reqretry.config import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_DELAY_MILLIS,
    DEFAULT_RETRY_LIMIT,
    DEFAULT_TIMEOUT,
)
from reqretry.utils import validate_executor_params


@dataclass(frozen=True)
class ExecutorConfig:
    r"""Immutable retry and timeout configuration of an executor.

    Args:
        retry_limit: Maximum number of attempts, including the first one.
            Must be >= 1.
        delay_millis: Fixed delay in milliseconds between a failed attempt
            and the next one. Must be >= 0.
        connect_timeout: Maximum seconds to establish a connection.
            Must be > 0.
        timeout: Maximum seconds for the whole attempt. Must be > 0.

    Raises:
        ConfigurationError: If one of the values is out of range.

    Example:
        ```pycon
        >>> from reqretry import ExecutorConfig
        >>> config = ExecutorConfig(retry_limit=5, delay_millis=250)
        >>> config.delay_seconds
        0.25

        ```
    """

    retry_limit: int = DEFAULT_RETRY_LIMIT
    delay_millis: int = DEFAULT_DELAY_MILLIS
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        validate_executor_params(
            retry_limit=self.retry_limit,
            delay_millis=self.delay_millis,
            connect_timeout=self.connect_timeout,
            timeout=self.timeout,
        )

    @property
    def delay_seconds(self) -> float:
        r"""The delay between two attempts, in seconds."""
        return self.delay_millis / 1000

    @property
    def http_timeout(self) -> httpx.Timeout:
        r"""The timeout of each phase (connect, read, write, pool) of an
        attempt.

        The whole attempt is bounded by ``timeout`` separately by the
        executors.
        """
        return httpx.Timeout(self.timeout, connect=self.connect_timeout)
