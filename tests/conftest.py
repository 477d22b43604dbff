"""
Pytest configuration for maillink tests

Pins config so a local .env cannot change produced URLs, and resets
telemetry counters around every test.
"""

from __future__ import annotations

import pytest

from maillink import config
from maillink.observability.telemetry import reset_counters


@pytest.fixture(autouse=True)
def pinned_config(monkeypatch):
    """Default settings regardless of the developer's environment"""
    monkeypatch.setattr(config, "WEBMAIL_HOST", "mail.google.com")
    monkeypatch.setattr(config, "DEFAULT_ACCOUNT_INDEX", None)
    monkeypatch.setattr(config, "SEARCH_WINDOW_DAYS", 1)
    monkeypatch.setattr(config, "SEARCH_TIMEZONE", None)
    return config


@pytest.fixture(autouse=True)
def clean_counters():
    reset_counters()
    yield
    reset_counters()
