"""Shared fixtures for calendarpicker tests."""

import datetime
from collections.abc import Generator
from typing import Any

import pytest

from calendarpicker.core.config_manager import PickerConfig
from calendarpicker.domain.picker_service import CalendarPickerService
from calendarpicker.domain.selection_store import SelectionStore

FIXED_TODAY = datetime.date(2024, 11, 15)


def pytest_configure(config: Any) -> None:
    """Register test markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: HTTP-level tests against the aiohttp app")


@pytest.fixture
def store() -> SelectionStore:
    """Fresh, empty selection store."""
    return SelectionStore()


@pytest.fixture
def service(store: SelectionStore) -> CalendarPickerService:
    """Picker service whose 'today' is pinned to 2024-11-15."""
    return CalendarPickerService(store=store, today_provider=lambda: FIXED_TODAY)


@pytest.fixture
def picker_config() -> PickerConfig:
    """Deterministic config with auth enabled."""
    return PickerConfig(api_token="test-token", cors_origins=["*"])


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Keep CALENDARPICKER_* overrides from leaking between tests."""
    for key in (
        "CALENDARPICKER_TEST_DATE",
        "CALENDARPICKER_DEBUG",
        "CALENDARPICKER_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    yield
