from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def normalize_user_id(value: Optional[str]) -> str:
    """User ids are emails; compare them trimmed and lowercased."""
    return (value or "").strip().lower()


def coerce_coordinate(value: Any) -> Optional[float]:
    """Keep a coordinate only when it is a real number (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def parse_number(value: Any) -> Optional[float]:
    """Lenient parse for stored cells: blank or non-numeric gives None."""
    if value is None or str(value).strip() == "":
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number
