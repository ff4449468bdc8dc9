r"""Contain the outcome of a single request attempt."""

from __future__ import annotations

__all__ = ["AttemptOutcome", "RetryableFailure", "Success"]

from dataclasses import dataclass
from typing import Any, Union

from reqretry.exceptions import RetryableRequestError


@dataclass(frozen=True)
class Success:
    r"""An attempt that received a response with a 2xx status code.

    ``decoded`` holds the decoded JSON value when the response declares a
    JSON content type, and is ``None`` otherwise.
    """

    status_code: int
    body: bytes
    decoded: Any = None
    is_json: bool = False

    @property
    def result(self) -> Any:
        r"""The value returned to the caller of the executor."""
        return self.decoded if self.is_json else self.body


@dataclass(frozen=True)
class RetryableFailure:
    r"""An attempt that failed and may be retried."""

    error: RetryableRequestError


AttemptOutcome = Union[Success, RetryableFailure]
