"""Unit tests for the selection state machine and store."""

import datetime
import threading

import pytest

from calendarpicker.domain.exceptions import InvalidDateError, MissingUserIdError
from calendarpicker.domain.selection_store import (
    STATUS_COMPLETE,
    STATUS_START_SELECTED,
    SelectionMode,
    SelectionState,
    SelectionStore,
    build_date,
    format_date,
    format_range,
)

pytestmark = pytest.mark.unit

SINGLE = SelectionMode.SINGLE
RANGE = SelectionMode.RANGE


class TestFormatting:
    def test_format_date_pads_day_and_month(self):
        assert format_date(datetime.date(2024, 3, 5)) == "05.03.2024"

    def test_format_range(self):
        start = datetime.date(2024, 11, 10)
        end = datetime.date(2024, 11, 20)
        assert format_range(start, end) == "10.11.2024 - 20.11.2024"

    def test_build_date_rejects_february_30(self):
        with pytest.raises(InvalidDateError):
            build_date(2024, 2, 30)

    def test_build_date_accepts_leap_day(self):
        assert build_date(2024, 2, 29) == datetime.date(2024, 2, 29)


class TestSingleMode:
    def test_single_selection_sets_one_date(self, store):
        outcome = store.apply_selection("u1", 2024, 11, 10, SINGLE)

        assert outcome.mode is SINGLE
        assert outcome.date == datetime.date(2024, 11, 10)
        assert outcome.formatted == "10.11.2024"
        assert outcome.message == "Выбрана дата: 10.11.2024"
        assert store.get_selection("u1").state is SelectionState.SINGLE_SET

    def test_second_single_selection_overwrites(self, store):
        store.apply_selection("u1", 2024, 11, 10, SINGLE)
        store.apply_selection("u1", 2024, 11, 20, SINGLE)

        selection = store.get_selection("u1")
        assert selection.dates == [datetime.date(2024, 11, 20)]
        assert selection.formatted == "20.11.2024"

    def test_single_overwrites_in_progress_range(self, store):
        store.apply_selection("u1", 2024, 11, 10, RANGE)
        store.apply_selection("u1", 2024, 11, 12, SINGLE)

        selection = store.get_selection("u1")
        assert selection.mode is SINGLE
        assert selection.dates == [datetime.date(2024, 11, 12)]

    def test_single_outcome_dict_shape(self, store):
        data = store.apply_selection("u1", 2024, 11, 10, SINGLE).to_dict()

        assert data == {
            "mode": "single",
            "date": "2024-11-10",
            "formatted": "10.11.2024",
            "message": "Выбрана дата: 10.11.2024",
        }


class TestRangeMode:
    def test_first_range_date_starts_range(self, store):
        outcome = store.apply_selection("u1", 2024, 11, 20, RANGE)

        assert outcome.status == STATUS_START_SELECTED
        assert outcome.start_date == datetime.date(2024, 11, 20)
        assert outcome.message == "Выберите конечную дату периода"
        assert store.get_selection("u1").state is SelectionState.RANGE_START

    def test_second_range_date_completes_in_chronological_order(self, store):
        store.apply_selection("u1", 2024, 11, 20, RANGE)
        outcome = store.apply_selection("u1", 2024, 11, 10, RANGE)

        assert outcome.status == STATUS_COMPLETE
        assert outcome.start_date == datetime.date(2024, 11, 10)
        assert outcome.end_date == datetime.date(2024, 11, 20)
        assert outcome.days_count == 11
        assert outcome.formatted == "10.11.2024 - 20.11.2024"
        assert outcome.message == "Выбран период: 10.11.2024 - 20.11.2024 (11 дн.)"

        selection = store.get_selection("u1")
        assert selection.state is SelectionState.RANGE_COMPLETE
        assert selection.dates == [datetime.date(2024, 11, 10), datetime.date(2024, 11, 20)]

    def test_same_day_range_counts_one_day(self, store):
        store.apply_selection("u1", 2024, 11, 10, RANGE)
        outcome = store.apply_selection("u1", 2024, 11, 10, RANGE)

        assert outcome.days_count == 1

    def test_range_across_year_boundary(self, store):
        store.apply_selection("u1", 2025, 1, 2, RANGE)
        outcome = store.apply_selection("u1", 2024, 12, 30, RANGE)

        assert outcome.days_count == 4
        assert outcome.formatted == "30.12.2024 - 02.01.2025"

    def test_third_range_selection_restarts(self, store):
        store.apply_selection("u1", 2024, 11, 10, RANGE)
        store.apply_selection("u1", 2024, 11, 20, RANGE)
        outcome = store.apply_selection("u1", 2024, 11, 25, RANGE)

        assert outcome.status == STATUS_START_SELECTED
        assert store.get_selection("u1").dates == [datetime.date(2024, 11, 25)]

    def test_range_after_single_starts_new_range(self, store):
        store.apply_selection("u1", 2024, 11, 10, SINGLE)
        outcome = store.apply_selection("u1", 2024, 11, 12, RANGE)

        assert outcome.status == STATUS_START_SELECTED
        assert store.get_selection("u1").dates == [datetime.date(2024, 11, 12)]

    def test_complete_outcome_dict_shape(self, store):
        store.apply_selection("u1", 2024, 11, 20, RANGE)
        data = store.apply_selection("u1", 2024, 11, 10, RANGE).to_dict()

        assert data["status"] == "complete"
        assert data["startDate"] == "2024-11-10"
        assert data["endDate"] == "2024-11-20"
        assert data["daysCount"] == 11
        assert "date" not in data


class TestStoreOperations:
    def test_invalid_date_leaves_state_untouched(self, store):
        store.apply_selection("u1", 2024, 11, 10, RANGE)

        with pytest.raises(InvalidDateError):
            store.apply_selection("u1", 2024, 2, 30, RANGE)

        assert store.get_selection("u1").state is SelectionState.RANGE_START

    def test_missing_user_id_raises(self, store):
        with pytest.raises(MissingUserIdError):
            store.apply_selection("", 2024, 11, 10, SINGLE)

    def test_get_selection_for_unknown_user_is_none(self, store):
        assert store.get_selection("nobody") is None

    def test_get_selection_returns_copy(self, store):
        store.apply_selection("u1", 2024, 11, 10, SINGLE)

        copy = store.get_selection("u1")
        copy.dates.append(datetime.date(2024, 11, 11))

        assert store.get_selection("u1").dates == [datetime.date(2024, 11, 10)]

    def test_clear_selection_is_idempotent(self, store):
        store.apply_selection("u1", 2024, 11, 10, SINGLE)

        assert store.clear_selection("u1") is True
        assert store.clear_selection("u1") is False
        assert store.clear_selection("never-seen") is False
        assert store.get_selection("u1") is None

    def test_change_mode_discards_mid_range_state(self, store):
        store.apply_selection("u1", 2024, 11, 10, RANGE)

        store.change_mode("u1", SINGLE)

        assert store.get_selection("u1") is None
        outcome = store.apply_selection("u1", 2024, 11, 20, RANGE)
        assert outcome.status == STATUS_START_SELECTED

    def test_change_mode_without_selection_is_noop(self, store):
        assert store.change_mode("u1", RANGE) is False

    def test_change_mode_is_remembered_for_next_day(self, store):
        store.change_mode("u1", RANGE)

        first = store.apply_selection("u1", 2024, 11, 10)
        second = store.apply_selection("u1", 2024, 11, 20)

        assert first.status == STATUS_START_SELECTED
        assert second.status == STATUS_COMPLETE
        assert store.preferred_mode("u1") is RANGE

    def test_explicit_mode_becomes_preference(self, store):
        store.apply_selection("u1", 2024, 11, 10, RANGE)

        outcome = store.apply_selection("u1", 2024, 11, 12)

        assert outcome.status == STATUS_COMPLETE

    def test_mode_defaults_to_single(self, store):
        outcome = store.apply_selection("u1", 2024, 11, 10)

        assert outcome.mode is SINGLE
        assert store.preferred_mode("nobody") is SINGLE

    def test_clear_keeps_chosen_mode(self, store):
        store.change_mode("u1", RANGE)
        store.apply_selection("u1", 2024, 11, 10)

        store.clear_selection("u1")

        assert store.preferred_mode("u1") is RANGE

    def test_lookups_of_unknown_users_do_not_retain_locks(self, store):
        store.apply_selection("u1", 2024, 11, 10, SINGLE)

        for i in range(1000):
            store.get_selection(f"ghost-{i}")
            store.clear_selection(f"ghost-{i}")

        assert store._user_locks == {}
        assert store.active_count() == 1

    def test_users_are_isolated(self, store):
        store.apply_selection("u1", 2024, 11, 10, RANGE)
        store.apply_selection("u2", 2024, 11, 15, RANGE)
        outcome = store.apply_selection("u1", 2024, 11, 12, RANGE)

        assert outcome.status == STATUS_COMPLETE
        assert store.get_selection("u2").state is SelectionState.RANGE_START
        assert store.active_count() == 2

    def test_concurrent_second_dates_complete_exactly_once(self, store):
        """Racing 'second date' submissions are serialized per user."""
        store.apply_selection("u1", 2024, 11, 1, RANGE)
        barrier = threading.Barrier(8)
        statuses = []
        statuses_lock = threading.Lock()

        def submit(day):
            barrier.wait()
            outcome = store.apply_selection("u1", 2024, 11, day, RANGE)
            with statuses_lock:
                statuses.append(outcome.status)

        threads = [threading.Thread(target=submit, args=(day,)) for day in range(2, 10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # Each submission alternates the machine between complete and start
        assert statuses.count(STATUS_COMPLETE) == 4
        assert statuses.count(STATUS_START_SELECTED) == 4
        assert len(store.get_selection("u1").dates) in (1, 2)
        assert store._user_locks == {}
