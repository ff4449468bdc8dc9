r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

from unittest.mock import patch

import reqretry


def test_package_version_is_string() -> None:
    """Test that __version__ is a string."""
    assert isinstance(reqretry.__version__, str)


def test_package_version_format() -> None:
    """Test that __version__ follows semantic versioning."""
    assert "." in reqretry.__version__


def test_package_version_fallback_on_not_installed() -> None:
    """Test that __version__ falls back to '0.0.0' when package is not
    installed."""
    from importlib.metadata import PackageNotFoundError

    with patch("importlib.metadata.version", side_effect=PackageNotFoundError):
        import importlib

        importlib.reload(reqretry)
        assert reqretry.__version__ == "0.0.0"

        # Reload again to restore normal state
        importlib.reload(reqretry)


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in reqretry.__all__:
        assert hasattr(reqretry, name), f"{name} is in __all__ but not defined in module"


def test_all_exports_count() -> None:
    """Test that __all__ has the expected number of exports."""
    # 5 constants + 2 executors + 1 config + 7 errors + descriptor + helper + version
    assert len(reqretry.__all__) == 18


def test_constants_are_immutable_types() -> None:
    assert isinstance(reqretry.DEFAULT_RETRY_LIMIT, int)
    assert isinstance(reqretry.DEFAULT_DELAY_MILLIS, int)
    assert isinstance(reqretry.DEFAULT_CONNECT_TIMEOUT, float)
    assert isinstance(reqretry.DEFAULT_TIMEOUT, float)
    assert isinstance(reqretry.JSON_CONTENT_TYPE, str)
