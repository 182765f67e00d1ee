"""Pydantic models for request validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from calendarpicker.domain.selection_store import SelectionMode


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _user_id_to_str(v: Any) -> Any:
    # Telegram sends numeric user ids
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return _blank_to_none(v)


class PickerRequestModel(BaseModel):
    """Base model: accepts camelCase aliases and field names, ignores extras like 'token'."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CalendarQueryParams(PickerRequestModel):
    """Query parameters for the calendar and keyboard endpoints.

    Attributes:
        year: Calendar year; defaults to the current year
        month: Month number; defaults to the current month
        mode: Selection mode shown as active in the keyboard
        user_id: User id embedded in day and mode callbacks
    """

    year: Optional[int] = None
    month: Optional[int] = None
    mode: SelectionMode = SelectionMode.SINGLE
    user_id: Optional[str] = Field(None, alias="userId")

    @field_validator("year", "month", mode="before")
    @classmethod
    def blank_is_default(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("mode", mode="before")
    @classmethod
    def default_mode(cls, v: Any) -> Any:
        return SelectionMode.SINGLE if _blank_to_none(v) is None else v

    @field_validator("user_id", mode="before")
    @classmethod
    def normalize_user_id(cls, v: Any) -> Any:
        return _user_id_to_str(v)


class SelectRequest(PickerRequestModel):
    """Body of POST /api/select.

    user_id stays optional here so a missing id is reported by the core as
    MissingUserId rather than as a generic validation error.
    """

    user_id: Optional[str] = Field(None, alias="userId")
    year: int
    month: int
    day: int
    mode: SelectionMode = SelectionMode.SINGLE

    @field_validator("user_id", mode="before")
    @classmethod
    def normalize_user_id(cls, v: Any) -> Any:
        return _user_id_to_str(v)


class NavigateQueryParams(PickerRequestModel):
    """Query parameters for GET /api/navigate."""

    year: int
    month: int
    direction: Literal["prev", "next"]


class WebhookRequest(PickerRequestModel):
    """Body of POST /api/webhook/protalk."""

    callback_data: str = Field(..., min_length=1)
    user_id: Optional[str] = None

    @field_validator("user_id", mode="before")
    @classmethod
    def normalize_user_id(cls, v: Any) -> Any:
        return _user_id_to_str(v)
