"""
Availability schedule editor.

A schedule maps ISO dates to period buckets::

    {"2024-06-15": {"morning": ["09:00"], "evening": ["16:30"]}}

Periods are derived from the slot's hour only. Empty periods and empty
dates are never stored. The editor is a plain state object driven by
``apply_action``; handlers never mutate the state they are given.
"""
import copy
from dataclasses import asdict, dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from config.logging import get_logger

logger = get_logger(__name__)

# =====================================================
# SLOT CATALOG
# =====================================================

PERIODS = ("morning", "afternoon", "evening")

TIME_SLOTS = {
    "morning": ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30"],
    "afternoon": ["12:00", "12:30", "13:00", "13:30", "14:00", "14:30", "15:00", "15:30"],
    "evening": ["16:00", "16:30", "17:00", "17:30"],
}

ALL_SLOTS = frozenset(slot for slots in TIME_SLOTS.values() for slot in slots)

QUICK_ADD_DAYS = 7

Schedule = Dict[str, Dict[str, List[str]]]


class ScheduleValidationError(ValueError):
    """A schedule edit was rejected; the message is shown to the admin."""


# =====================================================
# BUCKETING
# =====================================================

def period_for(slot: str) -> str:
    hour = int(slot.split(":")[0])
    if hour < 12:
        return "morning"
    if hour < 16:
        return "afternoon"
    return "evening"


def bucket_slots(slots: Iterable[str]) -> Dict[str, List[str]]:
    """
    File slots under their period.

    Raises:
        ScheduleValidationError: a slot is not in the catalog
    """
    day: Dict[str, List[str]] = {}
    for slot in sorted(set(slots)):
        if slot not in ALL_SLOTS:
            raise ScheduleValidationError(f"Invalid time slot: {slot}")
        day.setdefault(period_for(slot), []).append(slot)
    return {period: day[period] for period in PERIODS if period in day}


def flatten_day(day: Dict[str, List[str]]) -> List[str]:
    """Morning, then afternoon, then evening."""
    return [slot for period in PERIODS for slot in day.get(period, [])]


def full_day() -> Dict[str, List[str]]:
    return {period: list(TIME_SLOTS[period]) for period in PERIODS}


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ScheduleValidationError("Invalid date format. Use YYYY-MM-DD")


# =====================================================
# NORMALIZATION (API BOUNDARY)
# =====================================================

def _clean_slots(slots: Iterable[str], date_str: str) -> List[str]:
    kept = []
    for slot in slots or []:
        if slot in ALL_SLOTS:
            kept.append(slot)
        else:
            logger.warning("dropped_unknown_slot", date=date_str, slot=slot)
    return kept


def normalize_schedule(raw, today: date) -> Schedule:
    """
    Turn whatever the backend stored into the canonical mapping form.

    Accepts the mapping form, or the older list of ``{"date", "slots"}``
    entries. Weekday-only entries carry no date and are dropped. Past
    dates and unknown slots are dropped too.
    """
    flat: Dict[str, List[str]] = {}

    if isinstance(raw, dict):
        for date_str, day in raw.items():
            if isinstance(day, dict):
                slots = [s for period in PERIODS for s in day.get(period) or []]
            else:
                slots = list(day or [])
            flat.setdefault(date_str, []).extend(_clean_slots(slots, date_str))
    elif isinstance(raw, list):
        for entry in raw:
            if not isinstance(entry, dict) or not entry.get("date"):
                logger.warning("dropped_undated_entry", entry=entry)
                continue
            date_str = entry["date"]
            flat.setdefault(date_str, []).extend(_clean_slots(entry.get("slots"), date_str))
    elif raw:
        logger.warning("unrecognized_schedule_shape", kind=type(raw).__name__)

    schedule: Schedule = {}
    for date_str in sorted(flat):
        try:
            day_date = parse_date(date_str)
        except ScheduleValidationError:
            logger.warning("dropped_malformed_date", date=date_str)
            continue
        if day_date < today or not flat[date_str]:
            continue
        schedule[date_str] = bucket_slots(flat[date_str])
    return schedule


# =====================================================
# EDITOR STATE
# =====================================================

@dataclass
class EditorState:
    schedule: Schedule = field(default_factory=dict)
    selected_date: str = ""
    selected_slots: List[str] = field(default_factory=list)
    editing_date: Optional[str] = None
    error: Optional[str] = None
    # Set only once the doctor's availability came back from the backend.
    loaded: bool = False

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "EditorState":
        data = data or {}
        return cls(
            schedule=data.get("schedule") or {},
            selected_date=data.get("selected_date") or "",
            selected_slots=list(data.get("selected_slots") or []),
            editing_date=data.get("editing_date"),
            error=data.get("error"),
            loaded=bool(data.get("loaded")),
        )

    @property
    def is_editing(self) -> bool:
        return self.editing_date is not None


def _clear_selection(state: EditorState, **changes) -> EditorState:
    return replace(state, selected_date="", selected_slots=[], editing_date=None, **changes)


# =====================================================
# OPERATIONS
# =====================================================

def add_date(state: EditorState, date_str: str, slots: List[str], today: date) -> EditorState:
    if state.is_editing:
        raise ScheduleValidationError("Finish editing the current date before adding another")
    if not date_str:
        raise ScheduleValidationError("Please select a date")
    if not slots:
        raise ScheduleValidationError("Please select at least one time slot")
    if parse_date(date_str) < today:
        raise ScheduleValidationError("Cannot add a date in the past")

    schedule = copy.deepcopy(state.schedule)
    schedule[date_str] = bucket_slots(slots)
    return _clear_selection(state, schedule=schedule)


def edit_date(state: EditorState, date_str: str) -> EditorState:
    if date_str not in state.schedule:
        raise ScheduleValidationError("Date is not in the schedule")

    return replace(
        state,
        selected_date=date_str,
        selected_slots=flatten_day(state.schedule[date_str]),
        editing_date=date_str,
    )


def update_date(state: EditorState, slots: List[str]) -> EditorState:
    if not state.is_editing:
        raise ScheduleValidationError("No date is being edited")
    if not slots:
        raise ScheduleValidationError("Please select at least one time slot")

    schedule = copy.deepcopy(state.schedule)
    schedule[state.editing_date] = bucket_slots(slots)
    return _clear_selection(state, schedule=schedule)


def cancel_edit(state: EditorState) -> EditorState:
    return _clear_selection(state)


def remove_date(state: EditorState, date_str: str) -> EditorState:
    schedule = copy.deepcopy(state.schedule)
    schedule.pop(date_str, None)
    if state.editing_date == date_str:
        return _clear_selection(state, schedule=schedule)
    return replace(state, schedule=schedule)


def remove_slot(state: EditorState, date_str: str, slot: str) -> EditorState:
    schedule = copy.deepcopy(state.schedule)
    day = schedule.get(date_str)
    if not day:
        return state

    for period in PERIODS:
        if slot in day.get(period, []):
            day[period].remove(slot)
            if not day[period]:
                del day[period]
            break

    if not day:
        del schedule[date_str]
        if state.editing_date == date_str:
            return _clear_selection(state, schedule=schedule)
    return replace(state, schedule=schedule)


def quick_add_week(state: EditorState, today: date) -> EditorState:
    schedule = copy.deepcopy(state.schedule)
    for offset in range(QUICK_ADD_DAYS):
        date_str = (today + timedelta(days=offset)).isoformat()
        if date_str not in schedule:
            schedule[date_str] = full_day()
    return replace(state, schedule=schedule)


# =====================================================
# REDUCER
# =====================================================

ACTIONS = (
    "add_date",
    "edit_date",
    "update_date",
    "cancel_edit",
    "remove_date",
    "remove_slot",
    "quick_add_week",
)


def apply_action(state: EditorState, action: str, payload: Dict, today: date) -> EditorState:
    """
    Apply one editor action and return the next state.

    Validation failures come back as ``state.error`` with the schedule and
    the admin's in-progress selection left as they were.
    """
    slots = list(payload.get("slots") or [])
    date_str = payload.get("date") or ""
    state = replace(state, error=None)

    try:
        if action == "add_date":
            return add_date(state, date_str, slots, today)
        if action == "edit_date":
            return edit_date(state, date_str)
        if action == "update_date":
            return update_date(state, slots)
        if action == "cancel_edit":
            return cancel_edit(state)
        if action == "remove_date":
            return remove_date(state, date_str)
        if action == "remove_slot":
            return remove_slot(state, date_str, payload.get("slot") or "")
        if action == "quick_add_week":
            return quick_add_week(state, today)
        raise ScheduleValidationError(f"Unknown action: {action}")
    except ScheduleValidationError as e:
        logger.info("schedule_edit_rejected", action=action, reason=str(e))
        if action in ("add_date", "update_date"):
            state = replace(state, selected_date=date_str or state.selected_date, selected_slots=slots)
        return replace(state, error=str(e))
