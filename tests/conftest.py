"""Shared pytest configuration for repeatcal_lite tests."""

from typing import Any


def pytest_configure(config: Any) -> None:
    """Register test markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
