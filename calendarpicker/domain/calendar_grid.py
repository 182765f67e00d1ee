"""Month grid generation for the inline calendar."""

from __future__ import annotations

import calendar
import datetime
from dataclasses import dataclass
from typing import Literal

from calendarpicker.domain.exceptions import InvalidDateError, InvalidMonthError

# Cell value used for padding before day 1 and after the last day
EMPTY_CELL = 0

DAYS_PER_WEEK = 7

MONTH_NAMES: tuple[str, ...] = (
    "Январь",
    "Февраль",
    "Март",
    "Апрель",
    "Май",
    "Июнь",
    "Июль",
    "Август",
    "Сентябрь",
    "Октябрь",
    "Ноябрь",
    "Декабрь",
)

# Monday-first, matching the grid columns
WEEKDAY_LABELS: tuple[str, ...] = ("Пн", "Вт", "Ср", "Чт", "Пт", "Сб", "Вс")

Direction = Literal["prev", "next"]


@dataclass(frozen=True)
class CalendarGrid:
    """Week-partitioned day grid for one month.

    Attributes:
        year: Calendar year
        month: Month number (1..12)
        weeks: Rows of exactly seven cells; each cell is a day of month or EMPTY_CELL
    """

    year: int
    month: int
    weeks: tuple[tuple[int, ...], ...]

    @property
    def month_name(self) -> str:
        return month_name(self.month)

    @property
    def days_in_month(self) -> int:
        """Count of non-empty cells."""
        return sum(1 for week in self.weeks for day in week if day != EMPTY_CELL)

    @property
    def first_weekday(self) -> int:
        """Monday-indexed column of day 1 (0 = Monday .. 6 = Sunday)."""
        return self.weeks[0].index(1)

    def to_dict(self) -> dict[str, object]:
        return {
            "year": self.year,
            "month": self.month,
            "monthName": self.month_name,
            "calendar": [list(week) for week in self.weeks],
            "metadata": {
                "firstDayOfWeek": 1,  # Monday
                "daysInMonth": self.days_in_month,
            },
        }


def validate_month(month: int) -> None:
    """Raise InvalidMonthError unless month is within 1..12."""
    if not 1 <= month <= 12:
        raise InvalidMonthError(f"month must be within 1..12, got {month}")


def month_name(month: int) -> str:
    """Return the localized name for a month number."""
    validate_month(month)
    return MONTH_NAMES[month - 1]


def _month_layout(year: int, month: int) -> tuple[int, int]:
    """Return (Monday-indexed weekday of day 1, days in month)."""
    validate_month(month)
    if not datetime.MINYEAR <= year <= datetime.MAXYEAR:
        raise InvalidDateError(
            f"year must be within {datetime.MINYEAR}..{datetime.MAXYEAR}, got {year}"
        )
    # calendar.weekday() is Monday=0 already; leap years and December come from the stdlib
    return calendar.monthrange(year, month)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given month."""
    return _month_layout(year, month)[1]


def generate_calendar(year: int, month: int) -> CalendarGrid:
    """Build the week grid for a month.

    Args:
        year: Calendar year (1..9999)
        month: Month number (1..12)

    Returns:
        CalendarGrid whose rows all have seven cells

    Raises:
        InvalidMonthError: If month is outside 1..12
        InvalidDateError: If year is outside the supported range
    """
    offset, total_days = _month_layout(year, month)

    cells = [EMPTY_CELL] * offset + list(range(1, total_days + 1))
    trailing = -len(cells) % DAYS_PER_WEEK
    cells.extend([EMPTY_CELL] * trailing)

    weeks = tuple(
        tuple(cells[start : start + DAYS_PER_WEEK])
        for start in range(0, len(cells), DAYS_PER_WEEK)
    )
    return CalendarGrid(year=year, month=month, weeks=weeks)


def shift_month(year: int, month: int, direction: Direction) -> tuple[int, int]:
    """Return the (year, month) one step before or after the given month.

    Raises:
        InvalidMonthError: If month is outside 1..12
        ValueError: If direction is not "prev" or "next"
    """
    validate_month(month)
    if direction == "next":
        return (year + 1, 1) if month == 12 else (year, month + 1)
    if direction == "prev":
        return (year - 1, 12) if month == 1 else (year, month - 1)
    raise ValueError(f"direction must be 'prev' or 'next', got {direction!r}")
