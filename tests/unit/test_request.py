r"""Unit tests for RequestDescriptor and format_headers."""

from __future__ import annotations

import dataclasses

import pytest

from reqretry import RequestDescriptor, format_headers

TEST_URL = "https://api.example.com/data"


#######################################
#     Tests for RequestDescriptor     #
#######################################


def test_request_descriptor_defaults() -> None:
    descriptor = RequestDescriptor(url=TEST_URL)
    assert descriptor.url == TEST_URL
    assert descriptor.method is None
    assert descriptor.headers == {}
    assert descriptor.body is None


def test_request_descriptor_all_fields() -> None:
    descriptor = RequestDescriptor(
        url=TEST_URL, method="PUT", headers={"X-Trace": "1"}, body=b"payload"
    )
    assert descriptor.method == "PUT"
    assert descriptor.headers == {"X-Trace": "1"}
    assert descriptor.body == b"payload"


def test_request_descriptor_is_immutable() -> None:
    descriptor = RequestDescriptor(url=TEST_URL, method="GET")
    with pytest.raises(dataclasses.FrozenInstanceError):
        descriptor.method = "POST"  # type: ignore[misc]


def test_request_descriptor_equality() -> None:
    assert RequestDescriptor(url=TEST_URL, method="GET") == RequestDescriptor(
        url=TEST_URL, method="GET"
    )


###################################
#     Tests for format_headers    #
###################################


def test_format_headers() -> None:
    assert format_headers({"Content-Type": "application/json", "Accept": "*/*"}) == [
        "Content-Type: application/json",
        "Accept: */*",
    ]


def test_format_headers_empty() -> None:
    assert format_headers({}) == []


def test_format_headers_keeps_value_as_is() -> None:
    assert format_headers({"Authorization": "Bearer a:b"}) == ["Authorization: Bearer a:b"]
