"""In-memory per-user date selection store with single-date and range modes."""

from __future__ import annotations

import contextlib
import datetime
import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from calendarpicker.domain.exceptions import InvalidDateError, MissingUserIdError

logger = logging.getLogger(__name__)

DISPLAY_DATE_FORMAT = "%d.%m.%Y"

STATUS_START_SELECTED = "start_selected"
STATUS_COMPLETE = "complete"


class SelectionMode(str, Enum):
    """Selection mode chosen by the user."""

    SINGLE = "single"
    RANGE = "range"


class SelectionState(Enum):
    """Position of a user in the selection state machine."""

    EMPTY = "empty"
    SINGLE_SET = "single_set"
    RANGE_START = "range_start"
    RANGE_COMPLETE = "range_complete"


def format_date(value: datetime.date) -> str:
    """Render a date as DD.MM.YYYY."""
    return value.strftime(DISPLAY_DATE_FORMAT)


def format_range(start: datetime.date, end: datetime.date) -> str:
    """Render a date range as 'DD.MM.YYYY - DD.MM.YYYY'."""
    return f"{format_date(start)} - {format_date(end)}"


def build_date(year: int, month: int, day: int) -> datetime.date:
    """Build a calendar date, rejecting components that do not exist.

    Raises:
        InvalidDateError: If the components do not form a real date (e.g. Feb 30)
    """
    try:
        return datetime.date(year, month, day)
    except (ValueError, OverflowError, TypeError) as exc:
        raise InvalidDateError(f"invalid date {year}-{month}-{day}: {exc}") from exc


@dataclass
class Selection:
    """A user's current selection.

    Attributes:
        mode: Single date or range mode
        dates: Zero to two dates; in range mode two dates are kept in chronological order
    """

    mode: SelectionMode
    dates: list[datetime.date] = field(default_factory=list)

    @property
    def state(self) -> SelectionState:
        if not self.dates:
            return SelectionState.EMPTY
        if self.mode is SelectionMode.SINGLE:
            return SelectionState.SINGLE_SET
        if len(self.dates) == 1:
            return SelectionState.RANGE_START
        return SelectionState.RANGE_COMPLETE

    @property
    def formatted(self) -> Optional[str]:
        if not self.dates:
            return None
        if len(self.dates) == 1:
            return format_date(self.dates[0])
        return format_range(self.dates[0], self.dates[1])

    def copy(self) -> Selection:
        return Selection(mode=self.mode, dates=list(self.dates))

    def to_dict(self) -> dict[str, object]:
        return {
            "hasSelection": True,
            "mode": self.mode.value,
            "dates": [d.isoformat() for d in self.dates],
            "formatted": self.formatted,
        }


@dataclass(frozen=True)
class SelectionOutcome:
    """Result of applying one selection event."""

    mode: SelectionMode
    formatted: str
    message: str
    status: Optional[str] = None
    date: Optional[datetime.date] = None
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    days_count: Optional[int] = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"mode": self.mode.value}
        if self.status is not None:
            data["status"] = self.status
        if self.date is not None:
            data["date"] = self.date.isoformat()
        if self.start_date is not None:
            data["startDate"] = self.start_date.isoformat()
        if self.end_date is not None:
            data["endDate"] = self.end_date.isoformat()
        if self.days_count is not None:
            data["daysCount"] = self.days_count
        data["formatted"] = self.formatted
        data["message"] = self.message
        return data


class _UserLock:
    """A user's lock plus the number of callers currently waiting on or holding it."""

    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.holders = 0


class SelectionStore:
    """Process-wide store mapping user ids to their Selection.

    Concurrency contract: every operation on a user id runs while holding that
    user's lock, so at most one mutation per user is in flight. Operations on
    different user ids never share a lock. A user's lock exists only while some
    caller holds or waits for it; selections live until cleared or until the
    process exits.

    Besides the selection, the store remembers the mode each user last chose
    (via change_mode or an explicit apply_selection mode). Day selections made
    without an explicit mode use it.
    """

    def __init__(self) -> None:
        self._selections: dict[str, Selection] = {}
        self._mode_preferences: dict[str, SelectionMode] = {}
        self._user_locks: dict[str, _UserLock] = {}
        self._registry_lock = threading.Lock()

    @contextlib.contextmanager
    def _user_lock(self, user_id: str) -> Iterator[None]:
        with self._registry_lock:
            entry = self._user_locks.get(user_id)
            if entry is None:
                entry = _UserLock()
                self._user_locks[user_id] = entry
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._registry_lock:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._user_locks[user_id]

    def apply_selection(
        self,
        user_id: str,
        year: int,
        month: int,
        day: int,
        mode: Optional[SelectionMode] = None,
    ) -> SelectionOutcome:
        """Apply a day selection for a user and advance the state machine.

        Single mode always replaces the held date. Range mode starts a new range
        unless exactly one range date is held, in which case the range is
        completed and ordered chronologically.

        Args:
            user_id: Opaque user identifier
            year: Calendar year
            month: Month number
            day: Day of month
            mode: Selection mode for this event; None uses the user's last
                chosen mode (single if they never chose one)

        Returns:
            SelectionOutcome describing the new state

        Raises:
            MissingUserIdError: If user_id is empty
            InvalidDateError: If the date components are not a real date
        """
        if not user_id:
            raise MissingUserIdError("userId is required")
        selected = build_date(year, month, day)

        with self._user_lock(user_id):
            if mode is None:
                mode = self._mode_preferences.get(user_id, SelectionMode.SINGLE)
            else:
                mode = SelectionMode(mode)
                self._mode_preferences[user_id] = mode

            if mode is SelectionMode.SINGLE:
                self._selections[user_id] = Selection(mode=mode, dates=[selected])
                formatted = format_date(selected)
                logger.debug("User %s selected single date %s", user_id, selected)
                return SelectionOutcome(
                    mode=mode,
                    date=selected,
                    formatted=formatted,
                    message=f"Выбрана дата: {formatted}",
                )

            current = self._selections.get(user_id)
            if current is None or current.state is not SelectionState.RANGE_START:
                self._selections[user_id] = Selection(mode=mode, dates=[selected])
                logger.debug("User %s started range at %s", user_id, selected)
                return SelectionOutcome(
                    mode=mode,
                    status=STATUS_START_SELECTED,
                    start_date=selected,
                    formatted=format_date(selected),
                    message="Выберите конечную дату периода",
                )

            start, end = sorted((current.dates[0], selected))
            current.dates[:] = [start, end]
            days_count = (end - start).days + 1
            formatted = format_range(start, end)
            logger.debug("User %s completed range %s (%d days)", user_id, formatted, days_count)
            return SelectionOutcome(
                mode=mode,
                status=STATUS_COMPLETE,
                start_date=start,
                end_date=end,
                days_count=days_count,
                formatted=formatted,
                message=f"Выбран период: {formatted} ({days_count} дн.)",
            )

    def get_selection(self, user_id: str) -> Optional[Selection]:
        """Return a copy of the user's selection, or None."""
        with self._user_lock(user_id):
            selection = self._selections.get(user_id)
            return selection.copy() if selection is not None else None

    def preferred_mode(self, user_id: str) -> SelectionMode:
        """Mode used for the user's next day selection without an explicit mode."""
        with self._user_lock(user_id):
            return self._mode_preferences.get(user_id, SelectionMode.SINGLE)

    def clear_selection(self, user_id: str) -> bool:
        """Remove the user's selection.

        Clearing a user without a selection is a no-op. The user's chosen mode
        is kept.

        Returns:
            True if a selection was removed
        """
        with self._user_lock(user_id):
            removed = self._selections.pop(user_id, None) is not None
        if removed:
            logger.info("Cleared selection for user %s", user_id)
        return removed

    def change_mode(self, user_id: str, new_mode: SelectionMode) -> bool:
        """Switch the user's mode, discarding any in-progress selection.

        Returns:
            True if a selection was discarded
        """
        new_mode = SelectionMode(new_mode)
        with self._user_lock(user_id):
            self._mode_preferences[user_id] = new_mode
            removed = self._selections.pop(user_id, None) is not None
        logger.debug("User %s switched to %s mode", user_id, new_mode.value)
        return removed

    def active_count(self) -> int:
        """Number of users currently holding a selection."""
        with self._registry_lock:
            return len(self._selections)
