r"""Contain utility functions shared by the synchronous and asynchronous
executors."""

from __future__ import annotations

__all__ = [
    "attempt_timed_out",
    "build_request",
    "classify_response",
    "handle_transport_error",
    "is_json_content_type",
    "log_failed_attempt",
    "read_response",
    "validate_executor_params",
    "validate_request",
]

import json
import logging
import time
from typing import TYPE_CHECKING

import httpx

from reqretry.config import JSON_CONTENT_TYPE
from reqretry.exceptions import (
    ConfigurationError,
    HttpStatusError,
    ResponseDecodeError,
    RetryableRequestError,
    TransportError,
)
from reqretry.outcome import AttemptOutcome, RetryableFailure, Success
from reqretry.request import format_headers

if TYPE_CHECKING:
    from reqretry.request import RequestDescriptor


def validate_executor_params(
    retry_limit: int,
    delay_millis: int,
    connect_timeout: float,
    timeout: float,
) -> None:
    """Validate the retry and timeout parameters of an executor.

    Args:
        retry_limit: Maximum number of attempts. Must be an integer >= 1.
        delay_millis: Delay between attempts in milliseconds.
            Must be an integer >= 0.
        connect_timeout: Connection timeout in seconds. Must be > 0.
        timeout: Total timeout of an attempt in seconds. Must be > 0.

    Raises:
        ConfigurationError: If one of the parameters is out of range.

    Example:
        ```pycon
        >>> from reqretry.utils import validate_executor_params
        >>> validate_executor_params(retry_limit=3, delay_millis=1000, connect_timeout=10, timeout=30)
        >>> validate_executor_params(retry_limit=0, delay_millis=1000, connect_timeout=10, timeout=30)  # doctest: +SKIP

        ```
    """
    if isinstance(retry_limit, bool) or not isinstance(retry_limit, int) or retry_limit < 1:
        msg = f"retry_limit must be an integer >= 1, got {retry_limit!r}"
        raise ConfigurationError(msg)
    if isinstance(delay_millis, bool) or not isinstance(delay_millis, int) or delay_millis < 0:
        msg = f"delay_millis must be an integer >= 0, got {delay_millis!r}"
        raise ConfigurationError(msg)
    if connect_timeout <= 0:
        msg = f"connect_timeout must be > 0, got {connect_timeout}"
        raise ConfigurationError(msg)
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ConfigurationError(msg)


def validate_request(descriptor: RequestDescriptor) -> None:
    """Check that a request descriptor can be executed.

    Args:
        descriptor: The request to check.

    Raises:
        ConfigurationError: If the URL or the method is missing, if the
            URL cannot be parsed, or if a header cannot be encoded.
    """
    if not descriptor.url:
        msg = "The request URL is required and cannot be empty"
        raise ConfigurationError(msg)
    if not descriptor.method:
        msg = f"The request method is required for the request to {descriptor.url}"
        raise ConfigurationError(msg)
    try:
        httpx.URL(descriptor.url)
    except httpx.InvalidURL as exc:
        msg = f"The request URL {descriptor.url!r} is invalid: {exc}"
        raise ConfigurationError(msg) from exc
    try:
        httpx.Headers(dict(descriptor.headers))
    except (TypeError, UnicodeEncodeError) as exc:
        msg = f"The request headers for {descriptor.url} are invalid: {exc}"
        raise ConfigurationError(msg) from exc


def build_request(
    client: httpx.Client | httpx.AsyncClient,
    descriptor: RequestDescriptor,
    timeout: httpx.Timeout,
    log: logging.Logger,
) -> httpx.Request:
    r"""Build the transport request of one attempt.

    The method of the descriptor is used as is, even if a body is present.

    Args:
        client: The client used to send the request.
        descriptor: The request to build.
        timeout: The timeout of each phase of the attempt.
        log: The logger to use.

    Returns:
        The request to send.
    """
    log.debug(
        f"Building {descriptor.method} request to {descriptor.url} "
        f"with headers {format_headers(descriptor.headers)}"
    )
    return client.build_request(
        method=descriptor.method,
        url=descriptor.url,
        headers=dict(descriptor.headers),
        content=descriptor.body,
        timeout=timeout,
    )


def attempt_timed_out(request: httpx.Request, timeout: float) -> httpx.ReadTimeout:
    r"""Create the exception of an attempt that exceeded its total
    timeout.

    Args:
        request: The request of the attempt.
        timeout: The total timeout of the attempt in seconds.

    Returns:
        The timeout exception.
    """
    return httpx.ReadTimeout(f"Attempt exceeded the total timeout of {timeout}s", request=request)


def read_response(
    response: httpx.Response, request: httpx.Request, deadline: float, timeout: float
) -> httpx.Response:
    r"""Read a streamed response body before a deadline.

    The deadline is checked after each received chunk, so a server that
    sends its body slowly cannot hold an attempt open past the deadline
    for longer than one read timeout.

    Args:
        response: The streamed response.
        request: The request of the attempt.
        deadline: The ``time.monotonic()`` value at which the attempt
            expires.
        timeout: The total timeout of the attempt in seconds.

    Returns:
        A response whose body is fully loaded.

    Raises:
        httpx.ReadTimeout: If the deadline expires before the body is read.
    """
    chunks: list[bytes] = []
    try:
        if time.monotonic() > deadline:
            raise attempt_timed_out(request, timeout)
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if time.monotonic() > deadline:
                raise attempt_timed_out(request, timeout)
    finally:
        response.close()

    # The body is already decoded
    headers = httpx.Headers(response.headers)
    headers.pop("Content-Encoding", None)
    headers.pop("Content-Length", None)
    return httpx.Response(response.status_code, headers=headers, content=b"".join(chunks))


def is_json_content_type(content_type: str | None) -> bool:
    r"""Indicate if a content type declares a JSON body.

    The match is a case-insensitive substring match, so parameters like
    ``charset`` are accepted.

    Args:
        content_type: The value of the ``Content-Type`` header, if any.

    Returns:
        ``True`` if the body should be decoded as JSON.

    Example:
        ```pycon
        >>> from reqretry.utils import is_json_content_type
        >>> is_json_content_type("application/json; charset=utf-8")
        True
        >>> is_json_content_type("Application/JSON")
        True
        >>> is_json_content_type("text/plain")
        False
        >>> is_json_content_type(None)
        False

        ```
    """
    if not content_type:
        return False
    return JSON_CONTENT_TYPE in content_type.lower()


def classify_response(response: httpx.Response, method: str, url: str) -> AttemptOutcome:
    r"""Classify the response of an attempt.

    Args:
        response: The HTTP response.
        method: The HTTP method name.
        url: The URL that was requested.

    Returns:
        ``Success`` for a 2xx response whose body could be read, and
        ``RetryableFailure`` otherwise.
    """
    status_code = response.status_code
    body = response.content
    if not 200 <= status_code < 300:
        return RetryableFailure(
            HttpStatusError(
                method=method,
                url=url,
                message=f"{method} request to {url} failed with status {status_code}",
                status_code=status_code,
                body=body,
                response=response,
            )
        )

    if not is_json_content_type(response.headers.get("Content-Type")):
        return Success(status_code=status_code, body=body)
    # e.g. 204 No Content
    if not body.strip():
        return Success(status_code=status_code, body=body, decoded=None, is_json=True)

    try:
        # A declared charset wins over the UTF-8/16/32 detection of json.loads
        decoded = json.loads(response.text if response.charset_encoding else body)
    except ValueError as exc:
        return RetryableFailure(
            ResponseDecodeError(
                method=method,
                url=url,
                message=f"{method} request to {url} returned an invalid JSON body: {exc}",
                status_code=status_code,
                body=body,
                response=response,
                cause=exc,
            )
        )
    return Success(status_code=status_code, body=body, decoded=decoded, is_json=True)


def handle_transport_error(exc: httpx.RequestError, method: str, url: str) -> RetryableFailure:
    r"""Wrap a transport exception raised by httpx.

    Args:
        exc: The exception raised while sending the request.
        method: The HTTP method name.
        url: The URL that was requested.

    Returns:
        The failure of the attempt.
    """
    if isinstance(exc, httpx.TimeoutException):
        message = f"{method} request to {url} timed out: {exc}"
    else:
        message = f"{method} request to {url} encountered {type(exc).__name__}: {exc}"
    return RetryableFailure(TransportError(method=method, url=url, message=message, cause=exc))


def log_failed_attempt(
    log: logging.Logger, error: RetryableRequestError, attempt: int, retry_limit: int
) -> None:
    r"""Log the failure of an attempt.

    Args:
        log: The logger to use.
        error: The failure of the attempt.
        attempt: The attempt number (1-indexed).
        retry_limit: The maximum number of attempts.
    """
    log.warning(
        f"{error.method} request to {error.url} failed (attempt {attempt}/{retry_limit}): "
        f"{error.message}"
    )
