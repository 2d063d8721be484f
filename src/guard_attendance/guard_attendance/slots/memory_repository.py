from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..core.enums import ShiftType
from ..core.exceptions import ConflictError, DuplicateSlotError
from .model import DailySlot, NewSlot
from .repository import SlotRepository

_SHIFT_ORDER = {ShiftType.DAY: 0, ShiftType.NIGHT: 1}


def _sort_key(slot: DailySlot):
    return (slot.attendance_date, slot.site_id, _SHIFT_ORDER[slot.shift_type], slot.role_type, slot.slot_number)


class InMemorySlotRepository(SlotRepository):
    """Dict-backed store with the same uniqueness rules as the SQL schema.

    Used by the test-suite and by STORAGE_BACKEND=memory.
    """

    def __init__(self):
        self._rows: dict[int, DailySlot] = {}
        self._id = 0

    # -------- reads --------
    def get_by_id(self, slot_id: int) -> Optional[DailySlot]:
        return self._rows.get(int(slot_id))

    def all(self) -> list[DailySlot]:
        return sorted(self._rows.values(), key=_sort_key)

    def list_for_site_and_date(
        self,
        *,
        site_id: int,
        attendance_date: date,
        is_temporary: Optional[bool] = None,
        assigned_only: bool = False,
    ) -> Sequence[DailySlot]:
        items = [
            s
            for s in self._rows.values()
            if s.site_id == int(site_id)
            and s.attendance_date == attendance_date
            and (is_temporary is None or s.is_temporary == is_temporary)
            and (not assigned_only or s.assigned_guard_id is not None)
        ]
        return sorted(items, key=_sort_key)

    def list_for_guard(self, *, guard_id: int, start: date, end: date) -> Sequence[DailySlot]:
        items = [
            s
            for s in self._rows.values()
            if s.assigned_guard_id == int(guard_id) and start <= s.attendance_date <= end
        ]
        return sorted(items, key=_sort_key)

    def list_assigned_for_date(self, *, attendance_date: date, shift_type: Optional[ShiftType] = None) -> Sequence[DailySlot]:
        items = [
            s
            for s in self._rows.values()
            if s.attendance_date == attendance_date
            and s.assigned_guard_id is not None
            and (shift_type is None or s.shift_type == shift_type)
        ]
        return sorted(items, key=_sort_key)

    def find_guard_conflict(
        self,
        *,
        guard_id: int,
        attendance_date: date,
        shift_type: ShiftType,
        exclude_slot_id: Optional[int] = None,
    ) -> Optional[DailySlot]:
        for s in self.list_assigned_for_date(attendance_date=attendance_date, shift_type=shift_type):
            if s.assigned_guard_id == int(guard_id) and s.slot_id != exclude_slot_id:
                return s
        return None

    def max_slot_number(self, *, site_id: int, attendance_date: date, shift_type: ShiftType, role_type: str) -> int:
        numbers = [
            s.slot_number
            for s in self._rows.values()
            if s.site_id == int(site_id)
            and s.attendance_date == attendance_date
            and s.shift_type == shift_type
            and s.role_type == role_type
        ]
        return max(numbers, default=0)

    # -------- writes --------
    def insert_slots(self, slots: Sequence[NewSlot]) -> Sequence[DailySlot]:
        self._check_unique(slots, remaining=self._rows.values())
        return [self._add(s) for s in slots]

    def replace_slots(
        self,
        *,
        site_id: int,
        attendance_date: date,
        slots: Sequence[NewSlot],
        baseline_only: bool,
    ) -> Sequence[DailySlot]:
        doomed = {
            s.slot_id
            for s in self.list_for_site_and_date(site_id=site_id, attendance_date=attendance_date)
            if not (baseline_only and s.is_temporary)
        }
        remaining = [s for s in self._rows.values() if s.slot_id not in doomed]
        # Validate before deleting so a rejected write leaves the old rows in place.
        self._check_unique(slots, remaining=remaining)
        for slot_id in doomed:
            del self._rows[slot_id]
        return [self._add(s) for s in slots]

    def set_assignment(self, *, slot_id: int, guard_id: Optional[int], is_present: Optional[bool]) -> Optional[DailySlot]:
        slot = self._rows.get(int(slot_id))
        if not slot:
            return None
        if guard_id is not None:
            self._check_guard_free(guard_id, slot.attendance_date, slot.shift_type, exclude_slot_id=slot.slot_id)
        updated = replace(slot, assigned_guard_id=guard_id, is_present=is_present)
        self._rows[slot.slot_id] = updated
        return updated

    def set_presence(self, *, slot_id: int, is_present: Optional[bool]) -> Optional[DailySlot]:
        slot = self._rows.get(int(slot_id))
        if not slot:
            return None
        updated = replace(slot, is_present=is_present)
        self._rows[slot.slot_id] = updated
        return updated

    def update_temporary(
        self,
        *,
        slot_id: int,
        assigned_guard_id: Optional[int],
        is_present: Optional[bool],
        pay_rate: Optional[Decimal],
    ) -> Optional[DailySlot]:
        slot = self._rows.get(int(slot_id))
        if not slot or not slot.is_temporary:
            return None
        if assigned_guard_id is not None:
            self._check_guard_free(assigned_guard_id, slot.attendance_date, slot.shift_type, exclude_slot_id=slot.slot_id)
        updated = replace(slot, assigned_guard_id=assigned_guard_id, is_present=is_present, pay_rate=pay_rate)
        self._rows[slot.slot_id] = updated
        return updated

    def delete_temporary(self, *, slot_id: int) -> bool:
        slot = self._rows.get(int(slot_id))
        if not slot or not slot.is_temporary:
            return False
        del self._rows[slot.slot_id]
        return True

    # -------- internals --------
    def _add(self, new: NewSlot) -> DailySlot:
        self._id += 1
        slot = DailySlot(
            slot_id=self._id,
            site_id=int(new.site_id),
            attendance_date=new.attendance_date,
            shift_type=new.shift_type,
            role_type=new.role_type,
            slot_number=int(new.slot_number),
            assigned_guard_id=new.assigned_guard_id,
            is_present=new.is_present,
            pay_rate=new.pay_rate,
            is_temporary=bool(new.is_temporary),
        )
        self._rows[slot.slot_id] = slot
        return slot

    def _check_guard_free(self, guard_id: int, attendance_date: date, shift_type: ShiftType, *, exclude_slot_id: int) -> None:
        other = self.find_guard_conflict(
            guard_id=guard_id,
            attendance_date=attendance_date,
            shift_type=shift_type,
            exclude_slot_id=exclude_slot_id,
        )
        if other:
            raise ConflictError(
                f"Guard {guard_id} is already assigned to slot {other.slot_id} for this date and shift",
                conflicting_slot_id=other.slot_id,
            )

    @staticmethod
    def _check_unique(slots: Iterable[NewSlot], *, remaining: Iterable[DailySlot]) -> None:
        positions: dict[tuple, Optional[int]] = {}
        guards: dict[tuple, Optional[int]] = {}
        for s in remaining:
            positions[(s.site_id, s.attendance_date, s.shift_type, s.role_type, s.slot_number)] = s.slot_id
            if s.assigned_guard_id is not None:
                guards[(s.assigned_guard_id, s.attendance_date, s.shift_type)] = s.slot_id

        for s in slots:
            pos = (int(s.site_id), s.attendance_date, s.shift_type, s.role_type, int(s.slot_number))
            if pos in positions:
                raise DuplicateSlotError(
                    f"Slot {s.shift_type.value}/{s.role_type}#{s.slot_number} already exists for this site and date"
                )
            positions[pos] = None

            if s.assigned_guard_id is None:
                continue
            key = (s.assigned_guard_id, s.attendance_date, s.shift_type)
            if key in guards:
                raise ConflictError(
                    f"Guard {s.assigned_guard_id} is already assigned for this date and shift",
                    conflicting_slot_id=guards[key],
                )
            guards[key] = None
