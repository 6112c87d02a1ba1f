"""Shared fixtures for registry tests."""

from __future__ import annotations

import pytest

from tests.fakes import Tracker


@pytest.fixture
def tracker() -> Tracker:
    return Tracker()
