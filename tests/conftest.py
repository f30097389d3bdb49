"""Pytest configuration and shared fixtures for fallible tests."""

from __future__ import annotations

import pytest

from fallible import reset_config
from fallible._logging import clear_log_hooks


@pytest.fixture(autouse=True)
def clean_state():
    """Start every test from environment configuration and no log hooks."""
    reset_config()
    clear_log_hooks()
    yield
    reset_config()
    clear_log_hooks()
