from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_positive_id
from ..core.exceptions import ConflictError, NotFoundError
from ..guards.model import Guard
from ..guards.repository import GuardRepository
from ..slots.model import DailySlot
from ..slots.repository import SlotRepository

logger = logging.getLogger(__name__)


class AssignmentService:
    """Put guards on slots without double-booking them.

    A guard may hold at most one slot per (date, shift) across all sites. The
    check runs before every write; the store's unique key on
    (assigned_guard_id, attendance_date, shift_type) backs it up when two
    requests race past the check.
    """

    def __init__(self, slots: SlotRepository, guards: Optional[GuardRepository] = None):
        self._slots = slots
        self._guards = guards

    def assign_guard(self, slot_id: int, guard_id: int) -> DailySlot:
        guard_id = require_positive_id(guard_id, "Guard")
        slot = self._get_slot(slot_id)
        self.check_conflict(slot, guard_id)

        # Same occupant keeps its presence mark; a new one starts undetermined.
        is_present = slot.is_present if slot.assigned_guard_id == guard_id else None
        updated = self._commit(slot, guard_id, is_present)
        logger.info("Assigned guard %s to slot %s", guard_id, slot.slot_id)
        return updated

    def replace_guard(self, slot_id: int, guard_id: int) -> DailySlot:
        guard_id = require_positive_id(guard_id, "Guard")
        slot = self._get_slot(slot_id)
        self.check_conflict(slot, guard_id)

        updated = self._commit(slot, guard_id, None)
        logger.info("Replaced guard %s with %s on slot %s", slot.assigned_guard_id, guard_id, slot.slot_id)
        return updated

    def unassign_guard(self, slot_id: int) -> DailySlot:
        slot = self._get_slot(slot_id)
        updated = self._commit(slot, None, None)
        logger.info("Unassigned guard %s from slot %s", slot.assigned_guard_id, slot.slot_id)
        return updated

    def check_conflict(self, slot: DailySlot, guard_id: int) -> None:
        other = self._slots.find_guard_conflict(
            guard_id=guard_id,
            attendance_date=slot.attendance_date,
            shift_type=slot.shift_type,
            exclude_slot_id=slot.slot_id,
        )
        if other:
            logger.warning(
                "Guard %s rejected for slot %s: already on slot %s (site %s)",
                guard_id,
                slot.slot_id,
                other.slot_id,
                other.site_id,
            )
            raise ConflictError(
                f"Guard {guard_id} is already assigned to another slot (site {other.site_id}) "
                f"for {slot.attendance_date} ({slot.shift_type.value} shift)",
                conflicting_slot_id=other.slot_id,
            )

    def available_guards(self, slot_id: int) -> Sequence[Guard]:
        """Active guards not booked on any other slot for this slot's date and shift."""

        if self._guards is None:
            return []
        slot = self._get_slot(slot_id)
        booked = {
            s.assigned_guard_id
            for s in self._slots.list_assigned_for_date(attendance_date=slot.attendance_date, shift_type=slot.shift_type)
            if s.slot_id != slot.slot_id
        }
        return [g for g in self._guards.list_active() if g.guard_id not in booked]

    def _get_slot(self, slot_id: int) -> DailySlot:
        slot = self._slots.get_by_id(int(slot_id))
        if not slot:
            raise NotFoundError(f"Slot {slot_id} not found")
        return slot

    def _commit(self, slot: DailySlot, guard_id: Optional[int], is_present: Optional[bool]) -> DailySlot:
        updated = self._slots.set_assignment(slot_id=slot.slot_id, guard_id=guard_id, is_present=is_present)
        if not updated:
            raise NotFoundError(f"Slot {slot.slot_id} not found")
        return updated
