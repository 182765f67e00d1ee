"""Boundary façade over the calendar grid and selection store.

Every public method returns an OperationResult. PickerError raised by the core
is converted here, so the transport layer only ever inspects results.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional

from calendarpicker.domain.actions import Ignore, Navigate, SelectDay, SetMode, parse_action
from calendarpicker.domain.calendar_grid import (
    Direction,
    generate_calendar,
    month_name,
    shift_month,
)
from calendarpicker.domain.exceptions import MissingUserIdError, PickerError
from calendarpicker.domain.selection_store import SelectionMode, SelectionStore
from calendarpicker.presentation.keyboard import (
    DEFAULT_USER_ID,
    build_flat_inline,
    build_inline_keyboard,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """Explicit success or failure value returned across the core boundary."""

    ok: bool
    data: dict[str, Any] = field(default_factory=dict)
    error: Optional[PickerError] = None

    @classmethod
    def success(cls, **data: Any) -> OperationResult:
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: PickerError) -> OperationResult:
        return cls(ok=False, error=error)

    @property
    def error_kind(self) -> Optional[str]:
        return self.error.kind if self.error is not None else None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"success": True, **self.data}
        if self.error is None:
            raise ValueError("failed OperationResult carries no error")
        return {"success": False, **self.error.to_dict()}


class CalendarPickerService:
    """Runs calendar and selection operations and reports their outcome."""

    def __init__(
        self,
        store: SelectionStore,
        today_provider: Callable[[], datetime.date],
        default_user_id: str = DEFAULT_USER_ID,
    ) -> None:
        """Initialize the service.

        Args:
            store: Selection store owning all user selections
            today_provider: Callable returning the current calendar date
            default_user_id: User id rendered into keyboards when none is given
        """
        self.store = store
        self.today_provider = today_provider
        self.default_user_id = default_user_id

    def _resolve_month(self, year: Optional[int], month: Optional[int]) -> tuple[int, int]:
        if year is None or month is None:
            today = self.today_provider()
            year = today.year if year is None else year
            month = today.month if month is None else month
        return year, month

    def _run(self, operation: str, func: Callable[[], OperationResult]) -> OperationResult:
        try:
            return func()
        except PickerError as exc:
            logger.info("%s rejected (%s): %s", operation, exc.kind, exc.message)
            return OperationResult.failure(exc)

    def calendar(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        mode: SelectionMode = SelectionMode.SINGLE,
    ) -> OperationResult:
        """Return the month grid plus name and day-count metadata."""

        def _calendar() -> OperationResult:
            y, m = self._resolve_month(year, month)
            grid = generate_calendar(y, m)
            return OperationResult.success(**grid.to_dict(), mode=SelectionMode(mode).value)

        return self._run("calendar", _calendar)

    def keyboard(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        user_id: Optional[str] = None,
        mode: SelectionMode = SelectionMode.SINGLE,
    ) -> OperationResult:
        """Return the Telegram inline keyboard for a month."""

        def _keyboard() -> OperationResult:
            y, m = self._resolve_month(year, month)
            grid = generate_calendar(y, m)
            rows = build_inline_keyboard(grid, user_id or self.default_user_id, mode)
            return OperationResult.success(
                inline_keyboard=rows, year=y, month=m, mode=SelectionMode(mode).value
            )

        return self._run("keyboard", _keyboard)

    def flat_keyboard(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        user_id: Optional[str] = None,
        mode: SelectionMode = SelectionMode.SINGLE,
    ) -> OperationResult:
        """Return the flattened ##INLINE## keyboard encoding for a month."""

        def _flat() -> OperationResult:
            y, m = self._resolve_month(year, month)
            grid = generate_calendar(y, m)
            return OperationResult.success(
                protalk_format=build_flat_inline(grid, user_id or self.default_user_id, mode),
                text=f"Выберите дату ({grid.month_name} {y})",
                year=y,
                month=m,
                mode=SelectionMode(mode).value,
            )

        return self._run("flat_keyboard", _flat)

    def select(
        self,
        user_id: Optional[str],
        year: int,
        month: int,
        day: int,
        mode: SelectionMode = SelectionMode.SINGLE,
    ) -> OperationResult:
        """Apply a day selection for a user."""

        def _select() -> OperationResult:
            if not user_id:
                raise MissingUserIdError("userId is required")
            outcome = self.store.apply_selection(user_id, year, month, day, mode)
            return OperationResult.success(**outcome.to_dict())

        return self._run("select", _select)

    def get_selection(self, user_id: str) -> OperationResult:
        """Report the user's current selection, if any."""

        def _get() -> OperationResult:
            if not user_id:
                raise MissingUserIdError("userId is required")
            selection = self.store.get_selection(user_id)
            if selection is None:
                return OperationResult.success(hasSelection=False, message="Нет активного выбора")
            return OperationResult.success(**selection.to_dict())

        return self._run("get_selection", _get)

    def clear_selection(self, user_id: str) -> OperationResult:
        """Clear the user's selection; succeeds whether or not one existed."""

        def _clear() -> OperationResult:
            if not user_id:
                raise MissingUserIdError("userId is required")
            removed = self.store.clear_selection(user_id)
            message = "Выбор очищен" if removed else "Нет активного выбора"
            return OperationResult.success(cleared=removed, message=message)

        return self._run("clear_selection", _clear)

    def change_mode(self, user_id: str, mode: SelectionMode) -> OperationResult:
        """Switch the user's selection mode, discarding any selection."""

        def _change() -> OperationResult:
            if not user_id:
                raise MissingUserIdError("userId is required")
            discarded = self.store.change_mode(user_id, mode)
            return OperationResult.success(
                mode=SelectionMode(mode).value, userId=user_id, cleared=discarded
            )

        return self._run("change_mode", _change)

    def navigate(self, year: int, month: int, direction: Direction) -> OperationResult:
        """Return the month adjacent to (year, month) in the given direction."""

        def _navigate() -> OperationResult:
            y, m = shift_month(year, month, direction)
            return OperationResult.success(year=y, month=m, monthName=month_name(m))

        return self._run("navigate", _navigate)

    def handle_callback(
        self, callback_data: str, user_id: Optional[str] = None
    ) -> OperationResult:
        """Parse a keyboard callback id and run the action it names.

        Day selections use the mode the user last chose (single when they never
        chose one). Mode switches record the new mode and clear the selection.
        """

        def _handle() -> OperationResult:
            action = parse_action(callback_data, fallback_user_id=user_id)

            if isinstance(action, SelectDay):
                outcome = self.store.apply_selection(
                    action.user_id, action.year, action.month, action.day
                )
                parsed: dict[str, Any] = {
                    "action": "select_date",
                    "year": action.year,
                    "month": action.month,
                    "day": action.day,
                    "userId": action.user_id,
                    "mode": outcome.mode.value,
                }
                return OperationResult.success(
                    callback_data=callback_data, parsed=parsed, selection=outcome.to_dict()
                )

            if isinstance(action, Navigate):
                y, m = shift_month(action.year, action.month, action.direction)
                parsed = {
                    "action": "navigate",
                    "direction": action.direction,
                    "year": action.year,
                    "month": action.month,
                    "target": {"year": y, "month": m, "monthName": month_name(m)},
                }
                return OperationResult.success(callback_data=callback_data, parsed=parsed)

            if isinstance(action, SetMode):
                self.store.change_mode(action.user_id, action.mode)
                parsed = {
                    "action": "change_mode",
                    "mode": action.mode.value,
                    "year": action.year,
                    "month": action.month,
                    "userId": action.user_id,
                }
                return OperationResult.success(callback_data=callback_data, parsed=parsed)

            if isinstance(action, Ignore):
                return OperationResult.success(
                    callback_data=callback_data, parsed={"action": "ignore"}
                )

            raise TypeError(f"unsupported action type: {type(action).__name__}")

        return self._run("handle_callback", _handle)
