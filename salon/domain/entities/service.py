from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Service:
    id: str
    name: str
    description: str
    price: float
    duration: int  # minutes

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "duration": self.duration,
        }

    @staticmethod
    def from_document(data: dict[str, Any]) -> "Service":
        return Service(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            price=float(data.get("price") or 0),
            duration=int(data.get("duration") or 0),
        )
