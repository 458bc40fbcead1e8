from __future__ import annotations

import re

from salon.application.exceptions import ValidationError

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_text(value: str | None, field_name: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field_name} is required.")
    return cleaned


def require_email(value: str | None) -> str:
    cleaned = (value or "").strip().lower()
    if not _EMAIL.match(cleaned):
        raise ValidationError("A valid email address is required.")
    return cleaned


def require_non_negative(value: float, field_name: str) -> float:
    if value is None or value < 0:
        raise ValidationError(f"{field_name} must be zero or greater.")
    return float(value)


def require_positive_int(value: int, field_name: str) -> int:
    if value is None or int(value) != value or value <= 0:
        raise ValidationError(f"{field_name} must be a positive whole number.")
    return int(value)
