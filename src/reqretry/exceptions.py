r"""Define the exceptions raised while executing HTTP requests."""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "ExhaustedRetriesError",
    "HttpRequestError",
    "HttpStatusError",
    "ResponseDecodeError",
    "RetryableRequestError",
    "TransportError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class ConfigurationError(ValueError):
    r"""Raised when the executor or the request is misconfigured.

    This error is raised before any attempt is made and is never retried.
    """


class HttpRequestError(Exception):
    r"""Base class of the errors raised when an HTTP request fails.

    Args:
        method: The HTTP method of the request.
        url: The URL of the request.
        message: A human-readable description of the failure.
        status_code: The HTTP status code of the response, if any.
        response: The HTTP response, if any.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from reqretry.exceptions import HttpRequestError
        >>> exc = HttpRequestError(
        ...     method="GET", url="https://api.example.com", message="boom", status_code=500
        ... )
        >>> exc.status_code
        500

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.message = message
        self.status_code = status_code
        self.response = response
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(method={self.method!r}, url={self.url!r}, "
            f"status_code={self.status_code!r})"
        )


class RetryableRequestError(HttpRequestError):
    r"""Base class of the failures of a single attempt.

    Such failures are retried until the retry limit is reached.
    """


class TransportError(RetryableRequestError):
    r"""Raised when the request could not be completed by the transport
    (DNS resolution, refused connection, TLS error, timeout, ...)."""


class HttpStatusError(RetryableRequestError):
    r"""Raised when the server answers with a status code outside
    ``[200, 300)``.

    The raw response body is available as ``body``.
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int,
        body: bytes = b"",
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(
            method=method, url=url, message=message, status_code=status_code, response=response
        )
        self.body = body


class ResponseDecodeError(RetryableRequestError):
    r"""Raised when a successful response declares a JSON content type
    but its body cannot be decoded."""

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int,
        body: bytes = b"",
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            method=method,
            url=url,
            message=message,
            status_code=status_code,
            response=response,
            cause=cause,
        )
        self.body = body


class ExhaustedRetriesError(HttpRequestError):
    r"""Raised when every permitted attempt failed.

    Args:
        attempts: The number of attempts that were made.
        last_error: The failure of the final attempt.
    """

    def __init__(self, attempts: int, last_error: RetryableRequestError) -> None:
        status = "" if last_error.status_code is None else f" (last status {last_error.status_code})"
        super().__init__(
            method=last_error.method,
            url=last_error.url,
            message=(
                f"{last_error.method} request to {last_error.url} failed after {attempts} "
                f"attempts with {type(last_error).__name__}{status}: {last_error.message}"
            ),
            status_code=last_error.status_code,
            response=last_error.response,
            cause=last_error,
        )
        self.attempts = attempts
        self.last_error = last_error
