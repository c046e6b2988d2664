"""Shared pytest configuration and descriptor fixtures."""

from __future__ import annotations

import pytest

from cachegen.descriptors import FileDescriptor, ServiceDescriptor
from tests.test_helpers.descriptors import order_cache_file, order_cache_service


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register shared command-line options for test suites."""
    parser.addoption(
        "--update-golden",
        action="store_true",
        default=False,
        help="Update golden snapshot files with current output",
    )


@pytest.fixture
def update_golden(request: pytest.FixtureRequest) -> bool:
    """Fixture to check if golden files should be updated.

    Returns
    -------
    bool
        True if --update-golden was passed.
    """
    return bool(request.config.getoption("--update-golden"))


@pytest.fixture
def order_service() -> ServiceDescriptor:
    """Return the ``OrderCache`` service used across tests."""
    return order_cache_service()


@pytest.fixture
def order_file() -> FileDescriptor:
    """Return a proto file holding ``OrderCache`` and a plain ``OrderService``."""
    return order_cache_file()
