"""
Pytest configuration and fixtures for upcoming payments tests.
"""

import logging

import pytest
import structlog

from upcoming_payments.settings import reset_settings
from tests.factories import (  # noqa: F401
    discount_factory,
    fee_item_factory,
    group_factory,
)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit test")
    config.addinivalue_line("markers", "integration: Integration test")


@pytest.fixture(autouse=True)
def quiet_logging():
    """Only warnings and above, without logger caching."""
    structlog.reset_defaults()
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def pinned_settings(monkeypatch):
    """Pin the formatting locale so results do not depend on the host."""
    monkeypatch.setenv("UPCOMING_PAYMENTS_LOCALE", "en_US")
    monkeypatch.delenv("UPCOMING_PAYMENTS_CURRENCY", raising=False)
    reset_settings()
    yield
    reset_settings()


class RecordingNavigator:
    """Navigator that keeps every request it receives."""

    def __init__(self):
        self.requests = []

    def navigate(self, request):
        self.requests.append(request)


@pytest.fixture
def navigator():
    return RecordingNavigator()
