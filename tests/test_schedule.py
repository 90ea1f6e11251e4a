"""Tests for the availability schedule editor."""
import itertools
from datetime import date

import pytest

from doctors.schedule import (
    ALL_SLOTS,
    TIME_SLOTS,
    EditorState,
    ScheduleValidationError,
    apply_action,
    bucket_slots,
    flatten_day,
    full_day,
    normalize_schedule,
    period_for,
    remove_slot,
)

TODAY = date(2024, 6, 10)


def _state(schedule=None, **kwargs):
    return EditorState(schedule=schedule or {}, **kwargs)


class TestBucketing:
    @pytest.mark.parametrize("slot", sorted(ALL_SLOTS))
    def test_every_catalog_slot_lands_in_its_hour_bucket(self, slot):
        hour = int(slot[:2])
        expected = "morning" if hour < 12 else "afternoon" if hour < 16 else "evening"

        assert period_for(slot) == expected
        assert slot in TIME_SLOTS[expected]
        assert list(bucket_slots([slot])) == [expected]

    def test_empty_periods_are_omitted(self):
        assert bucket_slots(["09:00", "09:30"]) == {"morning": ["09:00", "09:30"]}

    def test_slots_are_sorted_and_deduplicated(self):
        assert bucket_slots(["10:00", "09:00", "10:00"]) == {"morning": ["09:00", "10:00"]}

    def test_unknown_slot_rejected(self):
        with pytest.raises(ScheduleValidationError):
            bucket_slots(["08:00"])

    def test_flatten_then_rebucket_is_identity(self):
        day = bucket_slots(["17:30", "09:00", "13:00", "11:30", "16:30"])

        assert flatten_day(day) == ["09:00", "11:30", "13:00", "16:30", "17:30"]
        assert bucket_slots(flatten_day(day)) == day


class TestAddDate:
    def test_buckets_selected_slots(self):
        state = apply_action(
            _state(), "add_date",
            {"date": "2024-06-15", "slots": ["09:00", "13:00", "16:30"]}, TODAY,
        )

        assert state.error is None
        assert state.schedule == {
            "2024-06-15": {"morning": ["09:00"], "afternoon": ["13:00"], "evening": ["16:30"]}
        }
        assert state.selected_date == ""
        assert state.selected_slots == []

    def test_overwrites_existing_date(self):
        start = _state({"2024-06-15": {"morning": ["09:00"]}})

        state = apply_action(start, "add_date", {"date": "2024-06-15", "slots": ["17:00"]}, TODAY)

        assert state.schedule == {"2024-06-15": {"evening": ["17:00"]}}

    def test_today_is_allowed(self):
        state = apply_action(_state(), "add_date", {"date": "2024-06-10", "slots": ["09:00"]}, TODAY)

        assert "2024-06-10" in state.schedule

    def test_past_date_rejected_and_selection_kept(self):
        start = _state({"2024-06-12": {"morning": ["09:00"]}})

        state = apply_action(start, "add_date", {"date": "2024-06-09", "slots": ["09:00"]}, TODAY)

        assert state.schedule == start.schedule
        assert state.error == "Cannot add a date in the past"
        assert state.selected_slots == ["09:00"]
        assert state.selected_date == "2024-06-09"

    @pytest.mark.parametrize("payload", [
        {"date": "", "slots": ["09:00"]},
        {"date": "2024-06-15", "slots": []},
        {"date": "15/06/2024", "slots": ["09:00"]},
        {"date": "2024-06-15", "slots": ["07:00"]},
    ])
    def test_invalid_input_leaves_schedule_unchanged(self, payload):
        state = apply_action(_state(), "add_date", payload, TODAY)

        assert state.schedule == {}
        assert state.error

    def test_input_state_is_not_mutated(self):
        start = _state({"2024-06-12": {"morning": ["09:00"]}})

        apply_action(start, "add_date", {"date": "2024-06-15", "slots": ["09:00"]}, TODAY)

        assert start.schedule == {"2024-06-12": {"morning": ["09:00"]}}

    def test_rejected_while_editing(self):
        start = apply_action(
            _state({"2024-06-12": {"morning": ["09:00"]}}), "edit_date", {"date": "2024-06-12"}, TODAY
        )

        state = apply_action(start, "add_date", {"date": "2024-06-15", "slots": ["09:00"]}, TODAY)

        assert "2024-06-15" not in state.schedule
        assert state.error


class TestEditFlow:
    SCHEDULE = {"2024-06-15": {"morning": ["09:00"], "afternoon": ["13:00"], "evening": ["16:30"]}}

    def test_edit_prefills_selection_in_period_order(self):
        state = apply_action(_state(self.SCHEDULE), "edit_date", {"date": "2024-06-15"}, TODAY)

        assert state.editing_date == "2024-06-15"
        assert state.is_editing
        assert state.selected_slots == ["09:00", "13:00", "16:30"]

    def test_edit_unknown_date(self):
        state = apply_action(_state(self.SCHEDULE), "edit_date", {"date": "2024-07-01"}, TODAY)

        assert not state.is_editing
        assert state.error

    def test_update_rebuckets_and_exits_edit_mode(self):
        editing = apply_action(_state(self.SCHEDULE), "edit_date", {"date": "2024-06-15"}, TODAY)

        state = apply_action(editing, "update_date", {"slots": ["10:00", "15:30"]}, TODAY)

        assert state.schedule == {"2024-06-15": {"morning": ["10:00"], "afternoon": ["15:30"]}}
        assert not state.is_editing
        assert state.selected_slots == []

    def test_update_without_edit_target(self):
        state = apply_action(_state(self.SCHEDULE), "update_date", {"slots": ["10:00"]}, TODAY)

        assert state.schedule == self.SCHEDULE
        assert state.error == "No date is being edited"

    def test_update_with_empty_slots_keeps_edit_mode(self):
        editing = apply_action(_state(self.SCHEDULE), "edit_date", {"date": "2024-06-15"}, TODAY)

        state = apply_action(editing, "update_date", {"slots": []}, TODAY)

        assert state.is_editing
        assert state.schedule == self.SCHEDULE
        assert state.error

    def test_cancel_discards_selection(self):
        editing = apply_action(_state(self.SCHEDULE), "edit_date", {"date": "2024-06-15"}, TODAY)

        state = apply_action(editing, "cancel_edit", {}, TODAY)

        assert not state.is_editing
        assert state.selected_slots == []
        assert state.schedule == self.SCHEDULE


class TestRemoval:
    def test_remove_date(self):
        start = _state({"2024-06-15": {"morning": ["09:00"]}, "2024-06-16": {"evening": ["17:00"]}})

        state = apply_action(start, "remove_date", {"date": "2024-06-15"}, TODAY)

        assert list(state.schedule) == ["2024-06-16"]

    def test_removing_edit_target_exits_edit_mode(self):
        start = _state({"2024-06-15": {"morning": ["09:00"]}})
        editing = apply_action(start, "edit_date", {"date": "2024-06-15"}, TODAY)

        state = apply_action(editing, "remove_date", {"date": "2024-06-15"}, TODAY)

        assert state.schedule == {}
        assert not state.is_editing

    def test_remove_slot_drops_empty_period(self):
        start = _state({"2024-06-15": {"morning": ["09:00"], "afternoon": ["13:00"], "evening": ["16:30"]}})

        state = apply_action(start, "remove_slot", {"date": "2024-06-15", "slot": "13:00"}, TODAY)

        assert state.schedule == {"2024-06-15": {"morning": ["09:00"], "evening": ["16:30"]}}

    def test_removing_every_slot_in_any_order_drops_the_date(self):
        day = bucket_slots(["09:00", "11:30", "13:00", "16:30"])
        for order in itertools.permutations(flatten_day(day)):
            state = _state({"2024-06-15": day, "2024-06-16": {"morning": ["09:00"]}})
            for slot in order:
                state = remove_slot(state, "2024-06-15", slot)

            assert "2024-06-15" not in state.schedule
            assert "2024-06-16" in state.schedule

    def test_remove_slot_for_missing_date_is_noop(self):
        start = _state({"2024-06-15": {"morning": ["09:00"]}})

        assert remove_slot(start, "2024-06-20", "09:00") == start


class TestQuickAddWeek:
    def test_fills_seven_days_starting_today(self):
        state = apply_action(_state(), "quick_add_week", {}, TODAY)

        assert list(state.schedule) == [f"2024-06-{d}" for d in range(10, 17)]
        assert all(day == full_day() for day in state.schedule.values())

    def test_never_overwrites_existing_dates(self):
        existing = {"2024-06-12": {"evening": ["17:30"]}, "2024-06-30": {"morning": ["09:00"]}}

        state = apply_action(_state(existing), "quick_add_week", {}, TODAY)

        assert state.schedule["2024-06-12"] == {"evening": ["17:30"]}
        assert state.schedule["2024-06-30"] == {"morning": ["09:00"]}
        assert len(state.schedule) == 8


class TestNormalize:
    def test_drops_past_dates(self):
        raw = {
            "2024-06-09": {"morning": ["09:00"]},
            "2024-06-10": {"morning": ["09:00"]},
        }

        assert normalize_schedule(raw, TODAY) == {"2024-06-10": {"morning": ["09:00"]}}

    def test_rebuckets_misfiled_and_unknown_slots(self):
        raw = {"2024-06-15": {"morning": ["16:00", "06:00"], "afternoon": [], "evening": ["09:30"]}}

        assert normalize_schedule(raw, TODAY) == {
            "2024-06-15": {"morning": ["09:30"], "evening": ["16:00"]}
        }

    def test_converts_dated_list_form(self):
        raw = [
            {"date": "2024-06-15", "slots": ["13:00", "09:00"]},
            {"day": "Monday", "time": "09:00"},
        ]

        assert normalize_schedule(raw, TODAY) == {
            "2024-06-15": {"morning": ["09:00"], "afternoon": ["13:00"]}
        }

    @pytest.mark.parametrize("raw", [None, {}, [], "garbage"])
    def test_empty_or_unknown_shapes(self, raw):
        assert normalize_schedule(raw, TODAY) == {}

    def test_drops_dates_left_empty(self):
        assert normalize_schedule({"2024-06-15": {"morning": []}}, TODAY) == {}


class TestEditorState:
    def test_dict_roundtrip_through_session(self):
        state = EditorState(
            schedule={"2024-06-15": {"morning": ["09:00"]}},
            selected_date="2024-06-15",
            selected_slots=["09:00"],
            editing_date="2024-06-15",
            error="boom",
            loaded=True,
        )

        assert EditorState.from_dict(state.to_dict()) == state

    def test_from_missing_session_entry(self):
        assert EditorState.from_dict(None) == EditorState()

    def test_missing_entry_is_not_loaded(self):
        assert EditorState.from_dict(None).loaded is False
        assert EditorState.from_dict({"schedule": {}}).loaded is False

    def test_unknown_action(self):
        state = apply_action(_state(), "explode", {}, TODAY)

        assert state.error == "Unknown action: explode"

    def test_error_cleared_by_next_successful_action(self):
        failed = apply_action(_state(), "add_date", {"date": "", "slots": []}, TODAY)

        state = apply_action(failed, "quick_add_week", {}, TODAY)

        assert state.error is None
