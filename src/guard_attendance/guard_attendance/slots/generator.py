from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..core.constants import FIRST_SLOT_NUMBER
from ..core.enums import ShiftType
from ..staffing.model import StaffingRequirement
from ..staffing.repository import StaffingRepository
from .carry_forward import CarryForwardResolver
from .model import DailySlot, NewSlot
from .regeneration import merge_regenerated_slots
from .repository import SlotRepository

logger = logging.getLogger(__name__)


def build_baseline(
    requirements: Sequence[StaffingRequirement],
    *,
    site_id: int,
    attendance_date: date,
    reserved: Optional[set[tuple[ShiftType, str, int]]] = None,
) -> list[NewSlot]:
    """Derive the baseline slot set for one site and date.

    ``slot_number`` runs from 1 per (shift_type, role_type); numbers in
    ``reserved`` (held by temporary slots) are skipped.
    """

    reserved = reserved or set()
    out: list[NewSlot] = []
    for req in requirements:
        for shift_type, count in ((ShiftType.DAY, req.day_slots), (ShiftType.NIGHT, req.night_slots)):
            number = FIRST_SLOT_NUMBER
            for _ in range(max(int(count), 0)):
                while (shift_type, req.role_type, number) in reserved:
                    number += 1
                out.append(
                    NewSlot(
                        site_id=int(site_id),
                        attendance_date=attendance_date,
                        shift_type=shift_type,
                        role_type=req.role_type,
                        slot_number=number,
                        pay_rate=req.budget_per_slot,
                    )
                )
                number += 1
    return out


class SlotGenerator:
    def __init__(
        self,
        slots: SlotRepository,
        staffing: StaffingRepository,
        *,
        carry_forward: Optional[CarryForwardResolver] = None,
    ):
        self._slots = slots
        self._staffing = staffing
        self._carry_forward = carry_forward or CarryForwardResolver(slots)

    def generate_slots_for_date(self, site_id: int, attendance_date: date, force_regenerate: bool = False) -> list[DailySlot]:
        existing = self._slots.list_for_site_and_date(site_id=site_id, attendance_date=attendance_date)
        baseline = [s for s in existing if not s.is_temporary]

        if baseline and not force_regenerate:
            return list(existing)

        requirements = self._staffing.list_for_site(site_id)
        if not requirements:
            logger.info("No staffing requirements for site %s; no slots generated for %s", site_id, attendance_date)
            if baseline:
                # Requirements were removed: the baseline goes, temporary slots stay.
                self._slots.replace_slots(site_id=site_id, attendance_date=attendance_date, slots=[], baseline_only=True)
            return [s for s in existing if s.is_temporary]

        reserved = {(s.shift_type, s.role_type, s.slot_number) for s in existing if s.is_temporary}
        new_slots = build_baseline(requirements, site_id=site_id, attendance_date=attendance_date, reserved=reserved)

        if baseline:
            # Old set is captured above, before the store deletes it.
            merged = merge_regenerated_slots(new_slots, baseline)
            self._slots.replace_slots(site_id=site_id, attendance_date=attendance_date, slots=merged, baseline_only=True)
            logger.info(
                "Regenerated %d slot(s) for site %s on %s (previously %d)",
                len(merged),
                site_id,
                attendance_date,
                len(baseline),
            )
        else:
            carried = self._carry_forward.apply_carry_forward(new_slots, site_id, attendance_date)
            self._slots.insert_slots(carried)
            logger.info("Generated %d slot(s) for site %s on %s", len(carried), site_id, attendance_date)

        return list(self._slots.list_for_site_and_date(site_id=site_id, attendance_date=attendance_date))
