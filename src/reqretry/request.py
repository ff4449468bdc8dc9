r"""Contain the description of the HTTP request to execute."""

from __future__ import annotations

__all__ = ["RequestDescriptor", "format_headers"]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class RequestDescriptor:
    r"""Describe one logical HTTP request.

    Args:
        url: The URL to send the request to.
        method: The HTTP method (e.g. ``"GET"``, ``"POST"``). It is
            required when the request is executed, but it is not checked
            against a fixed set of methods.
        headers: The request headers, as a mapping from name to value.
        body: The optional request payload. A body does not change the
            method of the request.

    Example:
        ```pycon
        >>> from reqretry import RequestDescriptor
        >>> descriptor = RequestDescriptor(
        ...     url="https://api.example.com/items",
        ...     method="POST",
        ...     headers={"Content-Type": "application/json"},
        ...     body=b'{"key": "value"}',
        ... )
        >>> descriptor.method
        'POST'

        ```
    """

    url: str
    method: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | str | None = None


def format_headers(headers: Mapping[str, str]) -> list[str]:
    r"""Format a header mapping as ``"Name: Value"`` lines.

    The lines follow the iteration order of the mapping.

    Args:
        headers: The headers to format.

    Returns:
        The formatted header lines.

    Example:
        ```pycon
        >>> from reqretry.request import format_headers
        >>> format_headers({"Accept": "application/json", "X-Trace": "42"})
        ['Accept: application/json', 'X-Trace: 42']

        ```
    """
    return [f"{name}: {value}" for name, value in headers.items()]
