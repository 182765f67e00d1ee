"""Unit tests for request validation models."""

import pytest
from pydantic import ValidationError

from calendarpicker.api.models import (
    CalendarQueryParams,
    NavigateQueryParams,
    SelectRequest,
    WebhookRequest,
)
from calendarpicker.domain.selection_store import SelectionMode

pytestmark = pytest.mark.unit


class TestCalendarQueryParams:
    def test_query_strings_are_coerced(self):
        params = CalendarQueryParams.model_validate(
            {"year": "2024", "month": "11", "mode": "range", "userId": "42"}
        )

        assert params.year == 2024
        assert params.month == 11
        assert params.mode is SelectionMode.RANGE
        assert params.user_id == "42"

    def test_blank_values_use_defaults(self):
        params = CalendarQueryParams.model_validate({"year": "", "month": " ", "mode": ""})

        assert params.year is None
        assert params.month is None
        assert params.mode is SelectionMode.SINGLE

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValidationError):
            CalendarQueryParams.model_validate({"mode": "weekly"})

    def test_token_is_ignored(self):
        params = CalendarQueryParams.model_validate({"token": "secret"})

        assert not hasattr(params, "token")


class TestSelectRequest:
    def test_numeric_user_id_becomes_string(self):
        request = SelectRequest.model_validate(
            {"userId": 123456, "year": 2024, "month": 11, "day": 10}
        )

        assert request.user_id == "123456"
        assert request.mode is SelectionMode.SINGLE

    def test_missing_user_id_is_allowed(self):
        request = SelectRequest.model_validate({"year": 2024, "month": 11, "day": 10})

        assert request.user_id is None

    def test_non_numeric_day_rejected(self):
        with pytest.raises(ValidationError):
            SelectRequest.model_validate({"userId": "1", "year": 2024, "month": 11, "day": "x"})


class TestNavigateQueryParams:
    def test_direction_must_be_prev_or_next(self):
        with pytest.raises(ValidationError):
            NavigateQueryParams.model_validate({"year": "2024", "month": "1", "direction": "up"})

    def test_valid_query(self):
        params = NavigateQueryParams.model_validate(
            {"year": "2024", "month": "1", "direction": "prev"}
        )

        assert (params.year, params.month, params.direction) == (2024, 1, "prev")


class TestWebhookRequest:
    def test_empty_callback_rejected(self):
        with pytest.raises(ValidationError):
            WebhookRequest.model_validate({"callback_data": ""})

    def test_numeric_user_id(self):
        request = WebhookRequest.model_validate({"callback_data": "ignore", "user_id": 7})

        assert request.user_id == "7"
