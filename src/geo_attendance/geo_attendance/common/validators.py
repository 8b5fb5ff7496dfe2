from __future__ import annotations

import math

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str, field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name).lower()
    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        raise ValidationError(f"{field_name} is not a valid address")
    return email


def require_latitude(value, field_name: str = "Latitude") -> float:
    lat = _require_float(value, field_name)
    if not -90.0 <= lat <= 90.0:
        raise ValidationError(f"{field_name} must be between -90 and 90")
    return lat


def require_longitude(value, field_name: str = "Longitude") -> float:
    lng = _require_float(value, field_name)
    if not -180.0 <= lng <= 180.0:
        raise ValidationError(f"{field_name} must be between -180 and 180")
    return lng


def require_positive(value, field_name: str) -> float:
    number = _require_float(value, field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number


def _require_float(value, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not a number")
    if math.isnan(number) or math.isinf(number):
        raise ValidationError(f"{field_name} is not a number")
    return number
