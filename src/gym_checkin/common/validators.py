from __future__ import annotations

import re
from typing import Any

from ..core.constants import MEMBER_ID_LENGTH, MEMBER_ID_PATTERN
from ..core.exceptions import ValidationError

_MEMBER_ID_RE = re.compile(MEMBER_ID_PATTERN)


def is_member_id(value: Any) -> bool:
    """True when value is exactly six ASCII digits."""
    return isinstance(value, str) and bool(_MEMBER_ID_RE.fullmatch(value)) and value.isascii()


def require_member_id(value: Any, field_name: str = "user_id") -> str:
    s = str(value if value is not None else "").strip()
    if not is_member_id(s):
        raise ValidationError(f"{field_name} must be 6 digits.")
    return s


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive_int(value: Any, field_name: str, *, default: int, maximum: int | None = None) -> int:
    if value is None or value == "":
        return default
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer.")
    if n <= 0:
        raise ValidationError(f"{field_name} must be a positive integer.")
    if maximum is not None and n > maximum:
        raise ValidationError(f"{field_name} must be at most {maximum}.")
    return n


def pad_member_number(number: int) -> str:
    return str(int(number)).zfill(MEMBER_ID_LENGTH)
