from __future__ import annotations

import logging
from collections import Counter
from datetime import date

from ..core.exceptions import ConflictError, ValidationError
from .model import DailySlot, NewSlot
from .repository import SlotRepository

logger = logging.getLogger(__name__)


class CopyForwardService:
    """Bulk "yesterday repeats today": overwrite a date with a clone of another date.

    Unlike regeneration this is a full overwrite, and every assigned guard on the
    target date starts out marked present.

    The copy is not a blind clone: if any guard would end up on two slots in one
    shift (already booked at another site on the target date, or listed twice on
    the source date) the whole copy is refused with ``ConflictError`` and the
    target date is left untouched.
    """

    def __init__(self, slots: SlotRepository):
        self._slots = slots

    def copy_forward(self, site_id: int, from_date: date, to_date: date) -> list[DailySlot]:
        if from_date == to_date:
            raise ValidationError("Source and target dates must differ")

        source = self._slots.list_for_site_and_date(site_id=site_id, attendance_date=from_date)
        if not source:
            logger.info("Nothing to copy for site %s: no slots on %s; %s left as is", site_id, from_date, to_date)
            return []

        clones = [
            NewSlot(
                site_id=int(site_id),
                attendance_date=to_date,
                shift_type=s.shift_type,
                role_type=s.role_type,
                slot_number=s.slot_number,
                assigned_guard_id=s.assigned_guard_id,
                is_present=True if s.assigned_guard_id is not None else None,
                pay_rate=s.pay_rate,
                is_temporary=s.is_temporary,
            )
            for s in source
        ]

        self._reject_double_bookings(site_id, to_date, clones)

        created = self._slots.replace_slots(
            site_id=site_id,
            attendance_date=to_date,
            slots=clones,
            baseline_only=False,
        )
        logger.info("Copied %d slot(s) for site %s from %s to %s", len(created), site_id, from_date, to_date)
        return list(created)

    def _reject_double_bookings(self, site_id: int, to_date: date, clones: list[NewSlot]) -> None:
        # The target date's own slots are about to be deleted, so only other sites count.
        booked = {
            (s.assigned_guard_id, s.shift_type): s
            for s in self._slots.list_assigned_for_date(attendance_date=to_date)
            if s.site_id != int(site_id)
        }
        for clone in clones:
            if clone.assigned_guard_id is None:
                continue
            other = booked.get((clone.assigned_guard_id, clone.shift_type))
            if other is not None:
                logger.warning(
                    "Copy-forward to %s for site %s rejected: guard %s already on slot %s (site %s)",
                    to_date,
                    site_id,
                    clone.assigned_guard_id,
                    other.slot_id,
                    other.site_id,
                )
                raise ConflictError(
                    f"Guard {clone.assigned_guard_id} is already assigned at site {other.site_id} "
                    f"for {to_date} ({clone.shift_type.value} shift)",
                    conflicting_slot_id=other.slot_id,
                )

        counts = Counter((c.assigned_guard_id, c.shift_type) for c in clones if c.assigned_guard_id is not None)
        duplicated = [key for key, n in counts.items() if n > 1]
        if duplicated:
            guard_id, shift_type = duplicated[0]
            raise ConflictError(f"Guard {guard_id} holds more than one {shift_type.value} slot on the source date")
