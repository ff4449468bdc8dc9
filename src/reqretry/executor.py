r"""Contain the synchronous HTTP request executor with fixed-delay
retries."""

from __future__ import annotations

__all__ = ["RetryingRequestExecutor"]

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from reqretry.config import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_DELAY_MILLIS,
    DEFAULT_RETRY_LIMIT,
    DEFAULT_TIMEOUT,
)
from reqretry.exceptions import ExhaustedRetriesError
from reqretry.executor_config import ExecutorConfig
from reqretry.outcome import AttemptOutcome, Success
from reqretry.utils import (
    build_request,
    classify_response,
    handle_transport_error,
    log_failed_attempt,
    read_response,
    validate_request,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from reqretry.exceptions import RetryableRequestError
    from reqretry.request import RequestDescriptor


class RetryingRequestExecutor:
    r"""Execute HTTP requests and retry them on transient failures.

    Every transport error and every status code outside ``[200, 300)`` is
    retried, up to ``retry_limit`` attempts in total, waiting a fixed
    ``delay_millis`` between two attempts.

    Args:
        retry_limit: Maximum number of attempts, including the first one.
            Must be >= 1.
        delay_millis: Fixed delay in milliseconds between a failed attempt
            and the next one. Must be >= 0.
        client: An optional ``httpx.Client`` used to send the requests.
            If None, a new client is created for each call and closed
            after use.
        connect_timeout: Maximum seconds to establish a connection.
        timeout: Maximum seconds for a whole attempt.
        sleep_func: The function used to wait between attempts. It
            receives the delay in seconds. Defaults to ``time.sleep``.
        logger: The logger used to report failed attempts. Defaults to
            the logger of this module.

    Raises:
        ConfigurationError: If one of the parameters is out of range.

    Example:
        ```pycon
        >>> from reqretry import RequestDescriptor, RetryingRequestExecutor
        >>> executor = RetryingRequestExecutor(retry_limit=3, delay_millis=2000)
        >>> data = executor.execute(
        ...     RequestDescriptor(url="https://api.example.com/todos/1", method="GET")
        ... )  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        retry_limit: int = DEFAULT_RETRY_LIMIT,
        delay_millis: int = DEFAULT_DELAY_MILLIS,
        *,
        client: httpx.Client | None = None,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        timeout: float = DEFAULT_TIMEOUT,
        sleep_func: Callable[[float], Any] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = ExecutorConfig(
            retry_limit=retry_limit,
            delay_millis=delay_millis,
            connect_timeout=connect_timeout,
            timeout=timeout,
        )
        self._client = client
        self._sleep_func = sleep_func
        self._logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: ExecutorConfig, **kwargs: Any) -> RetryingRequestExecutor:
        r"""Instantiate an executor from an ``ExecutorConfig``.

        Args:
            config: The retry and timeout configuration.
            **kwargs: The other keyword arguments of the constructor.

        Returns:
            The instantiated executor.
        """
        return cls(
            retry_limit=config.retry_limit,
            delay_millis=config.delay_millis,
            connect_timeout=config.connect_timeout,
            timeout=config.timeout,
            **kwargs,
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(retry_limit={self._config.retry_limit}, "
            f"delay_millis={self._config.delay_millis})"
        )

    @property
    def config(self) -> ExecutorConfig:
        return self._config

    def execute(self, descriptor: RequestDescriptor) -> Any:
        r"""Execute a request, retrying it on transient failures.

        Args:
            descriptor: The request to execute.

        Returns:
            The decoded JSON value if the response declares a JSON content
            type, otherwise the raw response body as bytes.

        Raises:
            ConfigurationError: If the method or the URL of the request is
                missing or invalid. No attempt is made in that case.
            ExhaustedRetriesError: If every permitted attempt failed. It
                wraps the failure of the final attempt.
        """
        validate_request(descriptor)

        owns_client = self._client is None
        client = self._client or httpx.Client()
        try:
            return self._execute_with_client(client, descriptor)
        finally:
            if owns_client:
                client.close()

    def _execute_with_client(self, client: httpx.Client, descriptor: RequestDescriptor) -> Any:
        retry_limit = self._config.retry_limit
        last_error: RetryableRequestError | None = None

        for attempt in range(1, retry_limit + 1):
            outcome = self._attempt(client, descriptor)
            if isinstance(outcome, Success):
                if attempt > 1:
                    self._logger.debug(
                        f"{descriptor.method} request to {descriptor.url} succeeded on attempt {attempt}"
                    )
                return outcome.result

            last_error = outcome.error
            log_failed_attempt(self._logger, last_error, attempt, retry_limit)
            if attempt < retry_limit:
                self._wait()

        raise ExhaustedRetriesError(attempts=retry_limit, last_error=last_error) from last_error

    def _attempt(self, client: httpx.Client, descriptor: RequestDescriptor) -> AttemptOutcome:
        timeout = self._config.timeout
        request = build_request(client, descriptor, self._config.http_timeout, self._logger)
        deadline = time.monotonic() + timeout
        try:
            response = client.send(request, stream=True)
            response = read_response(response, request, deadline, timeout)
        except httpx.RequestError as exc:
            return handle_transport_error(exc, descriptor.method, descriptor.url)
        return classify_response(response, descriptor.method, descriptor.url)

    def _wait(self) -> None:
        delay = self._config.delay_seconds
        self._logger.debug(f"Waiting {delay:.2f}s before retry")
        sleep = self._sleep_func or time.sleep
        sleep(delay)
