from __future__ import annotations

import logging
from datetime import date

from ..core.exceptions import InvalidStateError, NotFoundError
from ..slots.model import DailySlot
from ..slots.repository import SlotRepository

logger = logging.getLogger(__name__)


class AttendanceMarker:
    def __init__(self, slots: SlotRepository):
        self._slots = slots

    def mark_attendance(self, slot_id: int, is_present: bool) -> DailySlot:
        """Record present/absent for the slot's guard; re-marking corrects an earlier mark."""

        slot = self._slots.get_by_id(int(slot_id))
        if not slot:
            raise NotFoundError(f"Slot {slot_id} not found")
        if slot.assigned_guard_id is None:
            raise InvalidStateError("Cannot mark attendance on a slot with no assigned guard")

        updated = self._slots.set_presence(slot_id=slot.slot_id, is_present=bool(is_present))
        if not updated:
            raise NotFoundError(f"Slot {slot_id} not found")
        logger.info("Marked slot %s (guard %s) %s", slot.slot_id, slot.assigned_guard_id, "present" if is_present else "absent")
        return updated

    def mark_all_present(self, site_id: int, attendance_date: date) -> list[DailySlot]:
        pending = [
            s
            for s in self._slots.list_for_site_and_date(site_id=site_id, attendance_date=attendance_date, assigned_only=True)
            if s.is_present is None
        ]
        if not pending:
            raise InvalidStateError("No assigned guards without an attendance mark")

        out: list[DailySlot] = []
        for s in pending:
            updated = self._slots.set_presence(slot_id=s.slot_id, is_present=True)
            if updated:
                out.append(updated)
        logger.info("Marked %d slot(s) present for site %s on %s", len(out), site_id, attendance_date)
        return out
