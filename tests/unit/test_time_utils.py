"""Unit tests for the current-date provider."""

import datetime

import pytest

from calendarpicker.core.time_utils import TEST_DATE_ENV, now_iso, today

pytestmark = pytest.mark.unit


class TestToday:
    def test_override_with_date(self, monkeypatch):
        monkeypatch.setenv(TEST_DATE_ENV, "2024-11-15")

        assert today() == datetime.date(2024, 11, 15)

    def test_override_with_datetime(self, monkeypatch):
        monkeypatch.setenv(TEST_DATE_ENV, "2025-01-31T23:30:00Z")

        assert today() == datetime.date(2025, 1, 31)

    def test_invalid_override_falls_back_to_real_date(self, monkeypatch, caplog):
        monkeypatch.setenv(TEST_DATE_ENV, "not-a-date")

        result = today()

        assert isinstance(result, datetime.date)
        assert "Failed to parse" in caplog.text

    def test_without_override_returns_date(self):
        assert isinstance(today(), datetime.date)


def test_now_iso_is_utc_with_z_suffix():
    stamp = now_iso()

    assert stamp.endswith("Z")
    assert "+00:00" not in stamp
