"""Inline keyboard renderings of a CalendarGrid.

Two encodings of the same button layout:

- ``build_inline_keyboard``: Telegram-style rows of ``{"text", "callback_data"}``
- ``build_flat_inline``: ``label::action`` tokens joined by ``|`` with ``---``
  between rows, wrapped as ``##INLINE:...##`` for the Protalk bot platform
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from calendarpicker.domain.actions import (
    Action,
    Ignore,
    Navigate,
    SelectDay,
    SetMode,
    serialize_action,
)
from calendarpicker.domain.calendar_grid import EMPTY_CELL, WEEKDAY_LABELS, CalendarGrid
from calendarpicker.domain.selection_store import SelectionMode

DEFAULT_USER_ID = "guest"

ROW_SEPARATOR = "---"
TOKEN_SEPARATOR = "|"
LABEL_SEPARATOR = "::"

PREV_LABEL = "◀️"
NEXT_LABEL = "▶️"
BLANK_LABEL = " "

MODE_LABELS: dict[SelectionMode, tuple[str, str]] = {
    # mode -> (active label, inactive label)
    SelectionMode.SINGLE: ("✅ Одна дата", "📅 Одна дата"),
    SelectionMode.RANGE: ("✅ Период", "📆 Период"),
}


@dataclass(frozen=True)
class InlineButton:
    label: str
    action: Action

    @property
    def action_id(self) -> str:
        return serialize_action(self.action)

    def to_dict(self) -> dict[str, str]:
        return {"text": self.label, "callback_data": self.action_id}

    def to_token(self) -> str:
        return f"{self.label}{LABEL_SEPARATOR}{self.action_id}"


def build_button_rows(
    grid: CalendarGrid,
    user_id: Optional[str],
    mode: SelectionMode,
) -> list[list[InlineButton]]:
    """Lay out the calendar keyboard as rows of buttons.

    Row order: navigation header, weekday labels, one row per week, mode toggles.
    """
    user_id = user_id or DEFAULT_USER_ID
    mode = SelectionMode(mode)
    ignore = Ignore()

    rows: list[list[InlineButton]] = [
        [
            InlineButton(PREV_LABEL, Navigate("prev", grid.year, grid.month)),
            InlineButton(f"{grid.month_name} {grid.year}", ignore),
            InlineButton(NEXT_LABEL, Navigate("next", grid.year, grid.month)),
        ],
        [InlineButton(label, ignore) for label in WEEKDAY_LABELS],
    ]

    for week in grid.weeks:
        rows.append(
            [
                InlineButton(BLANK_LABEL, ignore)
                if day == EMPTY_CELL
                else InlineButton(str(day), SelectDay(grid.year, grid.month, day, user_id))
                for day in week
            ]
        )

    mode_row = []
    for option, (active_label, inactive_label) in MODE_LABELS.items():
        label = active_label if option is mode else inactive_label
        mode_row.append(InlineButton(label, SetMode(option, grid.year, grid.month, user_id)))
    rows.append(mode_row)

    return rows


def build_inline_keyboard(
    grid: CalendarGrid,
    user_id: Optional[str],
    mode: SelectionMode,
) -> list[list[dict[str, str]]]:
    """Return Telegram ``inline_keyboard`` rows for the grid."""
    return [[button.to_dict() for button in row] for row in build_button_rows(grid, user_id, mode)]


def build_flat_inline(
    grid: CalendarGrid,
    user_id: Optional[str],
    mode: SelectionMode,
) -> str:
    """Return the flattened ``##INLINE:...##`` encoding for the grid."""
    tokens: list[str] = []
    for row in build_button_rows(grid, user_id, mode):
        tokens.extend(button.to_token() for button in row)
        tokens.append(ROW_SEPARATOR)

    while tokens and tokens[-1] == ROW_SEPARATOR:
        tokens.pop()

    return f"##INLINE:{TOKEN_SEPARATOR.join(tokens)}##"
