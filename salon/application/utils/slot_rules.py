"""
Slot validity rules shared by the suggestion search and the booking coordinator.

All intervals are half-open ``[start, end)`` on a single day, expressed either as
minutes since midnight or as naive wall-clock datetimes. Cross-midnight spans are
not supported.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Iterable, Sequence, TypeVar

from salon.application.exceptions import AvailabilityValidationError
from salon.domain.entities.stylist import DAYS_OF_WEEK, AvailabilitySlot

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

T = TypeVar("T")


def parse_hhmm(value: str) -> int:
    """Parse "HH:mm" (24h) into minutes since midnight."""
    match = _HHMM.match((value or "").strip())
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:mm")
    return int(match.group(1)) * 60 + int(match.group(2))


def format_hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def to_datetime(day: date, minutes: int) -> datetime:
    return datetime.combine(day, time.min) + timedelta(minutes=minutes)


def minutes_of(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def overlaps(a_start: T, a_end: T, b_start: T, b_end: T) -> bool:
    return a_start < b_end and b_start < a_end


def is_valid_start(
    start: int,
    duration: int,
    windows: Iterable[tuple[int, int]],
    booked: Iterable[tuple[int, int]],
) -> bool:
    """
    A start is valid iff [start, start + duration) lies inside some window and
    intersects none of the booked intervals. Touching a boundary is not an overlap.
    """
    end = start + duration
    if not any(w_start <= start and end <= w_end for w_start, w_end in windows):
        return False
    return all(end <= b_start or b_end <= start for b_start, b_end in booked)


def candidate_starts(
    duration: int,
    windows: Sequence[tuple[int, int]],
    booked: Sequence[tuple[int, int]],
    step: int = 15,
) -> list[int]:
    """Sweep each window (chronologically) on a fixed grid and keep the valid starts."""
    if duration <= 0 or step <= 0:
        return []
    out: list[int] = []
    seen: set[int] = set()
    for w_start, w_end in sorted(windows):
        current = w_start
        while current + duration <= w_end:
            if current not in seen and is_valid_start(current, duration, windows, booked):
                out.append(current)
                seen.add(current)
            current += step
    return sorted(out)


def window_minutes(slots: Iterable[AvailabilitySlot]) -> list[tuple[int, int]]:
    return [(parse_hhmm(s.start), parse_hhmm(s.end)) for s in slots]


def fits_availability(
    start: datetime,
    end: datetime,
    slots: Iterable[AvailabilitySlot],
    booked: Iterable[tuple[datetime, datetime]],
) -> bool:
    """Datetime flavour of :func:`is_valid_start` for an already chosen slot."""
    if start.date() != end.date() and end != datetime.combine(start.date() + timedelta(days=1), time.min):
        return False
    if end <= start:
        return False
    day = start.date()
    start_min = minutes_of(start)
    duration = int((end - start).total_seconds() // 60)
    booked_min = [
        (minutes_of(b_start), minutes_of(b_end) if b_end.date() == day else 24 * 60)
        for b_start, b_end in booked
        if b_start.date() == day
    ]
    return is_valid_start(start_min, duration, window_minutes(slots), booked_min)


def validate_availability(
    availability: dict[str, Sequence[AvailabilitySlot]],
) -> dict[str, tuple[AvailabilitySlot, ...]]:
    """
    Reject unknown days, malformed times, inverted windows (start >= end) and
    overlapping windows on the same day. Returns the windows sorted by start.
    """
    cleaned: dict[str, tuple[AvailabilitySlot, ...]] = {}
    for day, slots in availability.items():
        day_key = (day or "").strip().lower()
        if day_key not in DAYS_OF_WEEK:
            raise AvailabilityValidationError(f"Unknown day of week: {day!r}")
        parsed: list[tuple[int, int, AvailabilitySlot]] = []
        for slot in slots:
            try:
                start = parse_hhmm(slot.start)
                end = parse_hhmm(slot.end)
            except ValueError as e:
                raise AvailabilityValidationError(f"{day_key}: {e}") from e
            if start >= end:
                raise AvailabilityValidationError(
                    f"{day_key}: window {slot.start}-{slot.end} must start before it ends"
                )
            parsed.append((start, end, AvailabilitySlot(start=format_hhmm(start), end=format_hhmm(end))))
        parsed.sort(key=lambda item: item[0])
        for prev, cur in zip(parsed, parsed[1:]):
            if overlaps(prev[0], prev[1], cur[0], cur[1]):
                raise AvailabilityValidationError(
                    f"{day_key}: window {prev[2].start}-{prev[2].end} overlaps {cur[2].start}-{cur[2].end}"
                )
        if parsed:
            cleaned[day_key] = tuple(item[2] for item in parsed)
    return cleaned
