from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..common.validators import (
    parse_optional_bool,
    parse_pay_rate,
    parse_shift_type,
    require_non_empty,
    require_positive_id,
)
from ..core.enums import ShiftType
from ..core.exceptions import ConflictError, InvalidStateError, NotFoundError, ValidationError
from ..slots.model import DailySlot, NewSlot
from ..slots.repository import SlotRepository
from ..staffing.repository import StaffingRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"assigned_guard_id", "is_present", "pay_rate"})


class TemporarySlotService:
    """Ad-hoc slots on top of a site's staffing baseline for one date.

    Every lookup here is scoped to ``is_temporary`` rows: a baseline slot id is
    reported as not found and never touched.
    """

    def __init__(self, slots: SlotRepository, staffing: StaffingRepository):
        self._slots = slots
        self._staffing = staffing

    def list_temporary_slots(self, site_id: int, attendance_date: date) -> Sequence[DailySlot]:
        return self._slots.list_for_site_and_date(site_id=site_id, attendance_date=attendance_date, is_temporary=True)

    def create_temporary_slot(
        self,
        site_id: int,
        attendance_date: date,
        shift_type: ShiftType | str,
        role_type: str,
        guard_id: Optional[int] = None,
        pay_rate: Decimal | str | None = None,
    ) -> DailySlot:
        site_id = require_positive_id(site_id, "Site")
        shift = parse_shift_type(shift_type)
        role_type = require_non_empty(role_type, "Role type")
        rate = parse_pay_rate(pay_rate)
        if guard_id is not None:
            guard_id = require_positive_id(guard_id, "Guard")

        requirements = self._staffing.list_for_site(site_id)
        if sum(r.total_slots for r in requirements) == 0:
            raise InvalidStateError("Site has no day or night slots configured; set staffing requirements first")

        if guard_id is not None:
            self._check_guard_free(guard_id, attendance_date, shift, exclude_slot_id=None)

        number = self._slots.max_slot_number(
            site_id=site_id,
            attendance_date=attendance_date,
            shift_type=shift,
            role_type=role_type,
        ) + 1

        created = self._slots.insert_slots(
            [
                NewSlot(
                    site_id=site_id,
                    attendance_date=attendance_date,
                    shift_type=shift,
                    role_type=role_type,
                    slot_number=number,
                    assigned_guard_id=guard_id,
                    pay_rate=rate,
                    is_temporary=True,
                )
            ]
        )
        slot = created[0]
        logger.info(
            "Created temporary slot %s (%s/%s#%s) for site %s on %s",
            slot.slot_id,
            shift.value,
            role_type,
            number,
            site_id,
            attendance_date,
        )
        return slot

    def update_temporary_slot(self, slot_id: int, **fields: Any) -> DailySlot:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated on a temporary slot: {', '.join(sorted(unknown))}")

        slot = self._get_temporary(slot_id)

        guard_id = slot.assigned_guard_id
        if "assigned_guard_id" in fields:
            raw = fields["assigned_guard_id"]
            guard_id = require_positive_id(raw, "Guard") if raw is not None else None
        guard_changed = guard_id != slot.assigned_guard_id

        if "is_present" in fields:
            is_present = parse_optional_bool(fields["is_present"], "is_present")
        else:
            is_present = None if guard_changed else slot.is_present

        if guard_id is None and is_present is not None:
            raise InvalidStateError("Cannot mark attendance on a slot with no assigned guard")

        pay_rate = parse_pay_rate(fields["pay_rate"]) if "pay_rate" in fields else slot.pay_rate

        if guard_id is not None and guard_changed:
            self._check_guard_free(guard_id, slot.attendance_date, slot.shift_type, exclude_slot_id=slot.slot_id)

        updated = self._slots.update_temporary(
            slot_id=slot.slot_id,
            assigned_guard_id=guard_id,
            is_present=is_present,
            pay_rate=pay_rate,
        )
        if not updated:
            raise NotFoundError(f"Temporary slot {slot_id} not found")
        logger.info("Updated temporary slot %s: %s", slot.slot_id, sorted(fields))
        return updated

    def delete_temporary_slot(self, slot_id: int) -> None:
        if not self._slots.delete_temporary(slot_id=int(slot_id)):
            raise NotFoundError(f"Temporary slot {slot_id} not found")
        logger.info("Deleted temporary slot %s", slot_id)

    def _get_temporary(self, slot_id: int) -> DailySlot:
        slot = self._slots.get_by_id(int(slot_id))
        if not slot or not slot.is_temporary:
            raise NotFoundError(f"Temporary slot {slot_id} not found")
        return slot

    def _check_guard_free(self, guard_id: int, attendance_date: date, shift: ShiftType, *, exclude_slot_id: Optional[int]) -> None:
        other = self._slots.find_guard_conflict(
            guard_id=guard_id,
            attendance_date=attendance_date,
            shift_type=shift,
            exclude_slot_id=exclude_slot_id,
        )
        if other:
            raise ConflictError(
                f"Guard {guard_id} is already assigned to another slot (site {other.site_id}) "
                f"for {attendance_date} ({shift.value} shift)",
                conflicting_slot_id=other.slot_id,
            )
