from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import PresenceStatus, ShiftType
from ..core.exceptions import NotFoundError, ValidationError
from .model import DailySlot, ShiftSummary
from .repository import SlotRepository


class SlotQueryService:
    """Read side of the slot grid: listings, per-shift counters and guard history."""

    def __init__(self, slots: SlotRepository):
        self._slots = slots

    def get_slot(self, slot_id: int) -> DailySlot:
        slot = self._slots.get_by_id(int(slot_id))
        if not slot:
            raise NotFoundError(f"Slot {slot_id} not found")
        return slot

    def list_slots(self, site_id: int, attendance_date: date) -> Sequence[DailySlot]:
        # An empty list during a regeneration window just means "no slots yet".
        return self._slots.list_for_site_and_date(site_id=site_id, attendance_date=attendance_date)

    def slots_for_guard(self, guard_id: int, start: date, end: date) -> Sequence[DailySlot]:
        if end < start:
            raise ValidationError("End date must be on or after start date")
        return self._slots.list_for_guard(guard_id=guard_id, start=start, end=end)

    def summarize(self, site_id: int, attendance_date: date) -> list[ShiftSummary]:
        counters = {
            shift: {status: 0 for status in PresenceStatus}
            for shift in ShiftType
        }
        for slot in self.list_slots(site_id, attendance_date):
            counters[slot.shift_type][slot.presence_status] += 1

        out: list[ShiftSummary] = []
        for shift, c in counters.items():
            total = sum(c.values())
            out.append(
                ShiftSummary(
                    shift_type=shift,
                    total=total,
                    assigned=total - c[PresenceStatus.OPEN],
                    present=c[PresenceStatus.PRESENT],
                    absent=c[PresenceStatus.ABSENT],
                    pending=c[PresenceStatus.PENDING],
                    open=c[PresenceStatus.OPEN],
                )
            )
        return out
