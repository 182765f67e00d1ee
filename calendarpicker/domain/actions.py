"""Callback action variants and their string encoding.

Inline keyboard buttons carry a short action id (Telegram ``callback_data``).
Inside the package actions are typed values; the underscore-delimited strings
only exist at the keyboard and webhook boundary:

    prev_<year>_<month>                        Navigate(direction="prev")
    next_<year>_<month>                        Navigate(direction="next")
    day_<year>_<month>_<day>_<userId>          SelectDay
    mode_<single|range>_<year>_<month>_<userId> SetMode
    ignore                                     Ignore
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from calendarpicker.domain.calendar_grid import Direction
from calendarpicker.domain.exceptions import MalformedActionIdError, MissingUserIdError
from calendarpicker.domain.selection_store import SelectionMode

SEPARATOR = "_"
IGNORE_TOKEN = "ignore"


@dataclass(frozen=True)
class Navigate:
    direction: Direction
    year: int
    month: int


@dataclass(frozen=True)
class SelectDay:
    year: int
    month: int
    day: int
    user_id: str


@dataclass(frozen=True)
class SetMode:
    mode: SelectionMode
    year: int
    month: int
    user_id: str


@dataclass(frozen=True)
class Ignore:
    pass


Action = Union[Navigate, SelectDay, SetMode, Ignore]


def serialize_action(action: Action) -> str:
    """Encode an action as a callback id string."""
    if isinstance(action, Navigate):
        return f"{action.direction}_{action.year}_{action.month}"
    if isinstance(action, SelectDay):
        return f"day_{action.year}_{action.month}_{action.day}_{action.user_id}"
    if isinstance(action, SetMode):
        return f"mode_{action.mode.value}_{action.year}_{action.month}_{action.user_id}"
    if isinstance(action, Ignore):
        return IGNORE_TOKEN
    raise TypeError(f"unsupported action type: {type(action).__name__}")


def _parse_int(token: str, field_name: str, action_id: str) -> int:
    # isdigit() also matches "²" and other non-ASCII digits; callback ids only carry 0-9
    if not (token.isascii() and token.isdigit()):
        raise MalformedActionIdError(f"{field_name} is not numeric in action id {action_id!r}")
    return int(token)


def _parse_month(token: str, action_id: str) -> int:
    month = _parse_int(token, "month", action_id)
    if not 1 <= month <= 12:
        raise MalformedActionIdError(f"month {month} out of range in action id {action_id!r}")
    return month


def _resolve_user_id(tokens: list[str], fallback_user_id: Optional[str], action_id: str) -> str:
    # user ids may themselves contain the separator
    user_id = SEPARATOR.join(tokens) or fallback_user_id
    if not user_id:
        raise MissingUserIdError(f"action id {action_id!r} carries no user id")
    return user_id


def parse_action(action_id: str, fallback_user_id: Optional[str] = None) -> Action:
    """Decode a callback id string into an action.

    Args:
        action_id: Callback id produced by serialize_action
        fallback_user_id: User id to use when the action id omits it

    Returns:
        Parsed action

    Raises:
        MalformedActionIdError: If the id has an unknown prefix, wrong token count,
            non-numeric coordinates or an unknown mode
        MissingUserIdError: If a user-scoped action has no user id
    """
    if not action_id or not isinstance(action_id, str):
        raise MalformedActionIdError("action id must be a non-empty string")

    tokens = action_id.split(SEPARATOR)
    kind, args = tokens[0], tokens[1:]

    if kind == IGNORE_TOKEN:
        if args:
            raise MalformedActionIdError(f"unexpected arguments in action id {action_id!r}")
        return Ignore()

    if kind in ("prev", "next"):
        if len(args) != 2:
            raise MalformedActionIdError(
                f"navigation action id needs year and month: {action_id!r}"
            )
        return Navigate(
            direction=kind,  # type: ignore[arg-type]
            year=_parse_int(args[0], "year", action_id),
            month=_parse_month(args[1], action_id),
        )

    if kind == "day":
        if len(args) < 3:
            raise MalformedActionIdError(
                f"day action id needs year, month and day: {action_id!r}"
            )
        return SelectDay(
            year=_parse_int(args[0], "year", action_id),
            month=_parse_month(args[1], action_id),
            day=_parse_int(args[2], "day", action_id),
            user_id=_resolve_user_id(args[3:], fallback_user_id, action_id),
        )

    if kind == "mode":
        if len(args) < 3:
            raise MalformedActionIdError(
                f"mode action id needs mode, year and month: {action_id!r}"
            )
        try:
            mode = SelectionMode(args[0])
        except ValueError:
            raise MalformedActionIdError(
                f"unknown mode {args[0]!r} in action id {action_id!r}"
            ) from None
        return SetMode(
            mode=mode,
            year=_parse_int(args[1], "year", action_id),
            month=_parse_month(args[2], action_id),
            user_id=_resolve_user_id(args[3:], fallback_user_id, action_id),
        )

    raise MalformedActionIdError(f"unknown action {kind!r} in action id {action_id!r}")
