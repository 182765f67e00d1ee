"""Unit tests for the inline keyboard encodings."""

import pytest

from calendarpicker.domain.calendar_grid import generate_calendar
from calendarpicker.domain.selection_store import SelectionMode
from calendarpicker.presentation.keyboard import (
    ROW_SEPARATOR,
    build_flat_inline,
    build_inline_keyboard,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def november_grid():
    return generate_calendar(2024, 11)


class TestInlineKeyboard:
    def test_row_layout(self, november_grid):
        rows = build_inline_keyboard(november_grid, "123", SelectionMode.SINGLE)

        # header + weekdays + weeks + mode toggles
        assert len(rows) == 2 + len(november_grid.weeks) + 1
        assert all(len(row) == 7 for row in rows[1:-1])

    def test_navigation_header(self, november_grid):
        header = build_inline_keyboard(november_grid, "123", SelectionMode.SINGLE)[0]

        assert header == [
            {"text": "◀️", "callback_data": "prev_2024_11"},
            {"text": "Ноябрь 2024", "callback_data": "ignore"},
            {"text": "▶️", "callback_data": "next_2024_11"},
        ]

    def test_weekday_row_is_inert(self, november_grid):
        weekdays = build_inline_keyboard(november_grid, "123", SelectionMode.SINGLE)[1]

        assert [b["text"] for b in weekdays] == ["Пн", "Вт", "Ср", "Чт", "Пт", "Сб", "Вс"]
        assert {b["callback_data"] for b in weekdays} == {"ignore"}

    def test_day_cells_carry_user_id(self, november_grid):
        first_week = build_inline_keyboard(november_grid, "123", SelectionMode.SINGLE)[2]

        assert first_week[0] == {"text": " ", "callback_data": "ignore"}
        assert first_week[4] == {"text": "1", "callback_data": "day_2024_11_1_123"}

    def test_missing_user_id_renders_guest(self, november_grid):
        first_week = build_inline_keyboard(november_grid, None, SelectionMode.SINGLE)[2]

        assert first_week[4]["callback_data"] == "day_2024_11_1_guest"

    def test_active_mode_is_checked(self, november_grid):
        single_row = build_inline_keyboard(november_grid, "123", SelectionMode.SINGLE)[-1]
        range_row = build_inline_keyboard(november_grid, "123", SelectionMode.RANGE)[-1]

        assert single_row == [
            {"text": "✅ Одна дата", "callback_data": "mode_single_2024_11_123"},
            {"text": "📆 Период", "callback_data": "mode_range_2024_11_123"},
        ]
        assert range_row[0]["text"] == "📅 Одна дата"
        assert range_row[1]["text"] == "✅ Период"


class TestFlatInline:
    def test_wrapped_and_not_ending_in_separator(self, november_grid):
        encoded = build_flat_inline(november_grid, "123", SelectionMode.RANGE)

        assert encoded.startswith("##INLINE:")
        assert encoded.endswith("##")
        body = encoded[len("##INLINE:") : -2]
        assert not body.endswith(ROW_SEPARATOR)
        assert body.startswith("◀️::prev_2024_11|Ноябрь 2024::ignore|▶️::next_2024_11|---|Пн::ignore")

    def test_rows_match_button_grid(self, november_grid):
        rows = build_inline_keyboard(november_grid, "123", SelectionMode.SINGLE)
        body = build_flat_inline(november_grid, "123", SelectionMode.SINGLE)[len("##INLINE:") : -2]

        flat_rows = body.split(f"|{ROW_SEPARATOR}|")
        assert len(flat_rows) == len(rows)
        assert flat_rows[-1] == (
            "✅ Одна дата::mode_single_2024_11_123|📆 Период::mode_range_2024_11_123"
        )
        assert " ::ignore" in flat_rows[2]
        assert "1::day_2024_11_1_123" in flat_rows[2].split("|")
