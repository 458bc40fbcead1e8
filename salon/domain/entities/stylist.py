from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

DAYS_OF_WEEK: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def day_of_week(day: date) -> str:
    return DAYS_OF_WEEK[day.weekday()]


@dataclass(frozen=True)
class AvailabilitySlot:
    start: str  # "HH:mm"
    end: str  # "HH:mm"


@dataclass(frozen=True)
class Stylist:
    id: str
    name: str
    avatar_url: str = ""
    availability: dict[str, tuple[AvailabilitySlot, ...]] = field(default_factory=dict)

    def windows_for(self, day: date) -> tuple[AvailabilitySlot, ...]:
        return self.availability.get(day_of_week(day), ())

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "avatar_url": self.avatar_url,
            "availability": {
                day: [{"start": s.start, "end": s.end} for s in slots]
                for day, slots in self.availability.items()
            },
        }

    @staticmethod
    def from_document(data: dict[str, Any]) -> "Stylist":
        raw = data.get("availability") or {}
        availability: dict[str, tuple[AvailabilitySlot, ...]] = {}
        for day, slots in raw.items():
            availability[str(day)] = tuple(
                AvailabilitySlot(start=str(s["start"]), end=str(s["end"])) for s in (slots or [])
            )
        return Stylist(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            avatar_url=str(data.get("avatar_url") or ""),
            availability=availability,
        )
