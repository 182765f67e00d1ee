"""Calendar grid, selection state machine and callback actions."""

from .calendar_grid import CalendarGrid, generate_calendar, shift_month
from .exceptions import (
    InvalidDateError,
    InvalidMonthError,
    MalformedActionIdError,
    MissingUserIdError,
    PickerError,
)
from .selection_store import Selection, SelectionMode, SelectionState, SelectionStore

__all__ = [
    "CalendarGrid",
    "InvalidDateError",
    "InvalidMonthError",
    "MalformedActionIdError",
    "MissingUserIdError",
    "PickerError",
    "Selection",
    "SelectionMode",
    "SelectionState",
    "SelectionStore",
    "generate_calendar",
    "shift_month",
]
