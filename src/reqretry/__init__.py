r"""reqretry - Resilient HTTP request executor with fixed-delay retries.

This package executes one configurable HTTP request and automatically
retries it on transient failures, up to a bounded number of attempts, with a
fixed delay between attempts. Built on top of the httpx library, it is a small
building block for callers that need to "call this endpoint, tolerate flaky
networks and servers, and give up after N tries".

Key Features:
    - Every transport error and every non-2xx status code is retried
    - Fixed delay between attempts, with an injectable sleep function
    - JSON decoding of responses that declare a JSON content type
    - Typed errors to tell configuration errors from exhausted retries
    - Synchronous and asynchronous executors

Example:
    ```pycon
    >>> from reqretry import RequestDescriptor, RetryingRequestExecutor
    >>> executor = RetryingRequestExecutor(retry_limit=3, delay_millis=1000)
    >>> data = executor.execute(
    ...     RequestDescriptor(url="https://api.example.com/data", method="GET")
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_DELAY_MILLIS",
    "DEFAULT_RETRY_LIMIT",
    "DEFAULT_TIMEOUT",
    "JSON_CONTENT_TYPE",
    "AsyncRetryingRequestExecutor",
    "ConfigurationError",
    "ExecutorConfig",
    "ExhaustedRetriesError",
    "HttpRequestError",
    "HttpStatusError",
    "RequestDescriptor",
    "ResponseDecodeError",
    "RetryableRequestError",
    "RetryingRequestExecutor",
    "TransportError",
    "__version__",
    "format_headers",
]

from importlib.metadata import PackageNotFoundError, version

from reqretry.config import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_DELAY_MILLIS,
    DEFAULT_RETRY_LIMIT,
    DEFAULT_TIMEOUT,
    JSON_CONTENT_TYPE,
)
from reqretry.exceptions import (
    ConfigurationError,
    ExhaustedRetriesError,
    HttpRequestError,
    HttpStatusError,
    ResponseDecodeError,
    RetryableRequestError,
    TransportError,
)
from reqretry.executor import RetryingRequestExecutor
from reqretry.executor_async import AsyncRetryingRequestExecutor
from reqretry.executor_config import ExecutorConfig
from reqretry.request import RequestDescriptor, format_headers

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
