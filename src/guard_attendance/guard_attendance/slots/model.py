from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import PresenceStatus, ShiftType

# (role_type, slot_number, shift_type): how slots are matched across dates and regenerations.
SlotPosition = tuple[str, int, ShiftType]


@dataclass(frozen=True)
class NewSlot:
    """A slot that has been derived but not yet written to the store."""

    site_id: int
    attendance_date: date
    shift_type: ShiftType
    role_type: str
    slot_number: int
    assigned_guard_id: Optional[int] = None
    is_present: Optional[bool] = None
    pay_rate: Optional[Decimal] = None
    is_temporary: bool = False

    @property
    def position(self) -> SlotPosition:
        return (self.role_type, self.slot_number, self.shift_type)


@dataclass(frozen=True)
class DailySlot:
    """One staffing position for a site, date, shift and role.

    ``is_present`` is tri-state: None (not yet determined), True, False. It is
    only ever non-null while a guard is assigned.
    """

    slot_id: int
    site_id: int
    attendance_date: date
    shift_type: ShiftType
    role_type: str
    slot_number: int
    assigned_guard_id: Optional[int] = None
    is_present: Optional[bool] = None
    pay_rate: Optional[Decimal] = None
    is_temporary: bool = False

    @property
    def position(self) -> SlotPosition:
        return (self.role_type, self.slot_number, self.shift_type)

    @property
    def is_assigned(self) -> bool:
        return self.assigned_guard_id is not None

    @property
    def presence_status(self) -> PresenceStatus:
        if self.assigned_guard_id is None:
            return PresenceStatus.OPEN
        if self.is_present is None:
            return PresenceStatus.PENDING
        return PresenceStatus.PRESENT if self.is_present else PresenceStatus.ABSENT

    def as_new(self, **changes) -> NewSlot:
        fields = dict(
            site_id=self.site_id,
            attendance_date=self.attendance_date,
            shift_type=self.shift_type,
            role_type=self.role_type,
            slot_number=self.slot_number,
            assigned_guard_id=self.assigned_guard_id,
            is_present=self.is_present,
            pay_rate=self.pay_rate,
            is_temporary=self.is_temporary,
        )
        fields.update(changes)
        return NewSlot(**fields)


@dataclass(frozen=True)
class ShiftSummary:
    """Read-model: slot counts for one shift of a site's day."""

    shift_type: ShiftType
    total: int = 0
    assigned: int = 0
    present: int = 0
    absent: int = 0
    pending: int = 0
    open: int = 0
