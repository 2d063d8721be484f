from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import PAY_RATE_QUANTUM
from ..core.enums import ShiftType
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive_id(value: Any, field_name: str) -> int:
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not a valid id")
    if ident <= 0:
        raise ValidationError(f"{field_name} is not a valid id")
    return ident


def parse_shift_type(value: Any) -> ShiftType:
    if isinstance(value, ShiftType):
        return value
    try:
        return ShiftType(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown shift type: {value!r}")


def parse_pay_rate(value: Any) -> Optional[Decimal]:
    """Normalize a pay rate to a non-negative Decimal with two places.

    ``None`` and empty strings mean "no rate".
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        rate = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"Invalid pay rate: {value!r}")
    if not rate.is_finite() or rate < 0:
        raise ValidationError("Pay rate must be a non-negative amount")
    return rate.quantize(PAY_RATE_QUANTUM)


def parse_optional_bool(value: Any, field_name: str) -> Optional[bool]:
    """Accept only JSON true/false/null; strings like "false" are rejected."""

    if value is None or isinstance(value, bool):
        return value
    raise ValidationError(f"{field_name} must be true, false or null")
