from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftType
from .model import DailySlot, NewSlot


class SlotRepository(Protocol):
    """Storage contract for daily slots.

    Implementations must keep two uniqueness rules:
    (site_id, attendance_date, shift_type, role_type, slot_number) and, for
    non-null guards, (assigned_guard_id, attendance_date, shift_type).
    Violations are reported as DuplicateSlotError and ConflictError.
    """

    def get_by_id(self, slot_id: int) -> Optional[DailySlot]:
        raise NotImplementedError

    def list_for_site_and_date(
        self,
        *,
        site_id: int,
        attendance_date: date,
        is_temporary: Optional[bool] = None,
        assigned_only: bool = False,
    ) -> Sequence[DailySlot]:
        """Ordered by shift_type, role_type, slot_number."""

        raise NotImplementedError

    def list_for_guard(self, *, guard_id: int, start: date, end: date) -> Sequence[DailySlot]:
        raise NotImplementedError

    def list_assigned_for_date(self, *, attendance_date: date, shift_type: Optional[ShiftType] = None) -> Sequence[DailySlot]:
        """All assigned slots for a date across every site."""

        raise NotImplementedError

    def find_guard_conflict(
        self,
        *,
        guard_id: int,
        attendance_date: date,
        shift_type: ShiftType,
        exclude_slot_id: Optional[int] = None,
    ) -> Optional[DailySlot]:
        """Phase one of an assignment: another slot holding the guard, if any."""

        raise NotImplementedError

    def max_slot_number(self, *, site_id: int, attendance_date: date, shift_type: ShiftType, role_type: str) -> int:
        """0 when no slot exists for the position group."""

        raise NotImplementedError

    def insert_slots(self, slots: Sequence[NewSlot]) -> Sequence[DailySlot]:
        raise NotImplementedError

    def replace_slots(
        self,
        *,
        site_id: int,
        attendance_date: date,
        slots: Sequence[NewSlot],
        baseline_only: bool,
    ) -> Sequence[DailySlot]:
        """Delete the site's slots for the date (baseline only, or all) and insert ``slots``.

        Runs as one unit of work: if the insert fails, the deleted rows stay.
        """

        raise NotImplementedError

    def set_assignment(self, *, slot_id: int, guard_id: Optional[int], is_present: Optional[bool]) -> Optional[DailySlot]:
        """Phase two of an assignment: write guard and presence together."""

        raise NotImplementedError

    def set_presence(self, *, slot_id: int, is_present: Optional[bool]) -> Optional[DailySlot]:
        raise NotImplementedError

    def update_temporary(
        self,
        *,
        slot_id: int,
        assigned_guard_id: Optional[int],
        is_present: Optional[bool],
        pay_rate: Optional[Decimal],
    ) -> Optional[DailySlot]:
        """Only rows with is_temporary = true; returns None for anything else."""

        raise NotImplementedError

    def delete_temporary(self, *, slot_id: int) -> bool:
        """Only rows with is_temporary = true."""

        raise NotImplementedError
