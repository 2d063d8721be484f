from __future__ import annotations

from enum import Enum


class ShiftType(str, Enum):
    """Shift a slot belongs to."""

    DAY = "day"
    NIGHT = "night"


class GuardStatus(str, Enum):
    """Guard directory status (only ACTIVE guards are offered for assignment)."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"


class PresenceStatus(str, Enum):
    """Read-model label for the tri-state ``is_present`` value."""

    OPEN = "OPEN"
    PENDING = "PENDING"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
