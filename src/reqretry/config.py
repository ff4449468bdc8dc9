r"""Contain the default configurations for HTTP requests executed with
fixed-delay retries."""

from __future__ import annotations

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_DELAY_MILLIS",
    "DEFAULT_RETRY_LIMIT",
    "DEFAULT_TIMEOUT",
    "JSON_CONTENT_TYPE",
]

# Timeouts in seconds applied to every attempt
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_TIMEOUT = 30.0

# Constants for retry configuration
DEFAULT_RETRY_LIMIT = 3
DEFAULT_DELAY_MILLIS = 1000

JSON_CONTENT_TYPE = "application/json"
