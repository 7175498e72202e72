"""Free-slot computation for a staff member on one calendar date.

Pure functions only: callers fetch the weekday's windows and the day's
pending/confirmed bookings, this module turns them into bookable start times.
"""
from dataclasses import dataclass
from datetime import date, time
from typing import Callable, Iterable, Protocol, Sequence

DEFAULT_SLOT_MINUTES = 60
MINUTES_PER_DAY = 24 * 60


class Window(Protocol):
    start_time: time | str
    end_time: time | str


@dataclass(frozen=True)
class ScheduleWindow:
    start_time: time | str
    end_time: time | str
    staff_id: int | None = None
    day_of_week: int | None = None


@dataclass(frozen=True)
class BookedInterval:
    start_time: time | str
    end_time: time | str


def to_minutes(value: time | str) -> int:
    """Minutes past midnight; seconds are ignored. Accepts ``time`` or ``"HH:MM"``."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    hours, minutes = value.strip().split(":")[:2]
    return int(hours) * 60 + int(minutes)


def format_hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def weekday_index(day: date) -> int:
    """0=Sunday .. 6=Saturday, the numbering schedule windows are stored with."""
    return (day.weekday() + 1) % 7


# (slot_start, slot_end, booked) -> True when the slot is taken
ConflictPolicy = Callable[[int, int, Sequence[BookedInterval]], bool]


def exact_start_match(slot_start: int, slot_end: int, booked: Sequence[BookedInterval]) -> bool:
    """Taken only when a booking starts exactly at the slot's HH:MM."""
    return any(to_minutes(b.start_time) == slot_start for b in booked)


def interval_overlap(slot_start: int, slot_end: int, booked: Sequence[BookedInterval]) -> bool:
    """Taken when any booking overlaps the slot at all."""
    return any(slot_start < to_minutes(b.end_time) and slot_end > to_minutes(b.start_time) for b in booked)


CONFLICT_POLICIES: dict[str, ConflictPolicy] = {
    "exact": exact_start_match,
    "overlap": interval_overlap,
}


def compute_free_slots(
    windows: Iterable[Window],
    booked: Iterable[BookedInterval],
    *,
    slot_minutes: int = DEFAULT_SLOT_MINUTES,
    conflict: ConflictPolicy = exact_start_match,
    dedupe: bool = False,
) -> list[str]:
    """Bookable "HH:MM" start times across all windows, ascending.

    Every window is walked from its start in ``slot_minutes`` steps while the
    step starts before the window end. Overlapping windows yield repeated
    start times unless ``dedupe`` is set.
    """
    if slot_minutes <= 0:
        raise ValueError("slot_minutes must be positive")
    booked = list(booked)
    slots: list[str] = []
    for window in windows:
        current = to_minutes(window.start_time)
        end = min(to_minutes(window.end_time), MINUTES_PER_DAY)
        while current < end:
            if not conflict(current, current + slot_minutes, booked):
                slots.append(format_hhmm(current))
            current += slot_minutes
    if dedupe:
        slots = list(dict.fromkeys(slots))
    # zero-padded HH:MM sorts correctly as text
    return sorted(slots)
