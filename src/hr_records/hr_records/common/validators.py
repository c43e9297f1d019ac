from __future__ import annotations

import re
from datetime import date, time
from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.constants import EMAIL_MAX_LENGTH, PHONE_MAX_LENGTH
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_time_of_day

E = TypeVar("E", bound=Enum)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_RE = re.compile(r"^[\d\s\-+()]+$")


def _require_str(value: object, field_name: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ValidationError.for_field(field_name, f"{field_name} must be a string")


def require_non_empty(
    value: Optional[str],
    field_name: str,
    *,
    min_len: Optional[int] = None,
    max_len: Optional[int] = None,
) -> str:
    _require_str(value, field_name)
    if not value or not value.strip():
        raise ValidationError.for_field(field_name, f"{field_name} is required")
    v = value.strip()
    if min_len is not None and len(v) < min_len:
        raise ValidationError.for_field(field_name, f"{field_name} must be at least {min_len} characters")
    if max_len is not None and len(v) > max_len:
        raise ValidationError.for_field(field_name, f"{field_name} must not exceed {max_len} characters")
    return v


def require_min_length(value: Optional[str], field_name: str, min_len: int, max_len: Optional[int] = None) -> str:
    _require_str(value, field_name)
    if value is None or len(value) < min_len:
        raise ValidationError.for_field(field_name, f"{field_name} must be at least {min_len} characters")
    if max_len is not None and len(value) > max_len:
        raise ValidationError.for_field(field_name, f"{field_name} must not exceed {max_len} characters")
    return value


def optional_text(value: Optional[str], field_name: str, max_len: Optional[int] = None) -> Optional[str]:
    """Trim free text; blank becomes None."""
    _require_str(value, field_name)
    if value is None:
        return None
    v = value.strip()
    if not v:
        return None
    if max_len is not None and len(v) > max_len:
        raise ValidationError.for_field(field_name, f"{field_name} must not exceed {max_len} characters")
    return v


def require_email(value: Optional[str], field_name: str = "email") -> str:
    """Trimmed, lower-cased address."""
    v = require_non_empty(value, field_name, max_len=EMAIL_MAX_LENGTH).lower()
    if not EMAIL_RE.match(v):
        raise ValidationError.for_field(field_name, "Invalid email format")
    return v


def optional_phone(value: Optional[str], field_name: str = "phone") -> Optional[str]:
    v = optional_text(value, field_name, PHONE_MAX_LENGTH)
    if v is not None and not PHONE_RE.match(v):
        raise ValidationError.for_field(field_name, "Invalid phone number format")
    return v


def parse_date_field(value: object, field_name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except (TypeError, ValueError):
        raise ValidationError.for_field(field_name, "Date must be in YYYY-MM-DD format", summary="Invalid date format")


def parse_time_field(value: object, field_name: str) -> Optional[time]:
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    try:
        return parse_time_of_day(str(value))
    except (TypeError, ValueError):
        raise ValidationError.for_field(field_name, f"{field_name} must be in HH:MM:SS format", summary="Invalid time format")


def parse_id_field(value: object, field_name: str) -> int:
    if isinstance(value, bool):
        ident = 0
    elif isinstance(value, float):
        ident = int(value) if value.is_integer() else 0
    else:
        try:
            ident = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            ident = 0
    if ident < 1:
        raise ValidationError.for_field(field_name, f"{field_name} must be a positive integer", summary=f"Invalid {field_name}")
    return ident


def parse_enum_field(value: object, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError.for_field(field_name, f"{field_name} must be one of: {allowed}")


def optional_id_field(value: object, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return parse_id_field(value, field_name)


def optional_date_field(value: object, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    return parse_date_field(value, field_name)


def optional_number_field(value: object, field_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError.for_field(field_name, f"{field_name} must be a number")
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError.for_field(field_name, f"{field_name} must be a number")


def require_date_field(value: object, field_name: str) -> date:
    if value is None or value == "":
        raise ValidationError.for_field(field_name, f"{field_name} is required")
    return parse_date_field(value, field_name)
