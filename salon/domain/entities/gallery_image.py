from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GalleryImage:
    id: str
    src: str
    alt: str
    hint: str

    def to_document(self) -> dict[str, Any]:
        return {"id": self.id, "src": self.src, "alt": self.alt, "hint": self.hint}

    @staticmethod
    def from_document(data: dict[str, Any]) -> "GalleryImage":
        return GalleryImage(
            id=str(data["id"]),
            src=str(data.get("src") or ""),
            alt=str(data.get("alt") or ""),
            hint=str(data.get("hint") or ""),
        )
