from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Sequence

from ..common.datetime_utils import previous_day
from ..core.constants import CARRY_FORWARD_LOOKBACK_DAYS
from .model import DailySlot, NewSlot, SlotPosition
from .repository import SlotRepository

logger = logging.getLogger(__name__)


class CarryForwardResolver:
    """Copy yesterday's roster onto a date whose slots are being created for the first time.

    Guard, pay rate and the temporary flag come across; presence never does,
    so every carried slot starts undetermined and must be marked for the day.
    """

    def __init__(self, slots: SlotRepository):
        self._slots = slots

    def apply_carry_forward(self, new_slots: Sequence[NewSlot], site_id: int, attendance_date: date) -> list[NewSlot]:
        source_date = previous_day(attendance_date, days=CARRY_FORWARD_LOOKBACK_DAYS)
        previous = self._slots.list_for_site_and_date(
            site_id=site_id,
            attendance_date=source_date,
            assigned_only=True,
        )
        if not previous:
            return [replace(s, is_present=None) for s in new_slots]

        by_position: dict[SlotPosition, DailySlot] = {s.position: s for s in previous}
        booked = self._booked_on(attendance_date)

        out: list[NewSlot] = []
        carried = 0
        for new in new_slots:
            prev = by_position.get(new.position)
            if prev is None:
                out.append(replace(new, is_present=None))
                continue

            other = booked.get((prev.assigned_guard_id, new.shift_type))
            if other is not None:
                logger.warning(
                    "Not carrying guard %s onto site %s %s %s/%s#%s: already on slot %s (site %s)",
                    prev.assigned_guard_id,
                    site_id,
                    attendance_date,
                    new.shift_type.value,
                    new.role_type,
                    new.slot_number,
                    other.slot_id,
                    other.site_id,
                )
                out.append(replace(new, is_present=None))
                continue

            out.append(
                replace(
                    new,
                    assigned_guard_id=prev.assigned_guard_id,
                    pay_rate=prev.pay_rate if prev.pay_rate is not None else new.pay_rate,
                    is_temporary=prev.is_temporary,
                    is_present=None,
                )
            )
            carried += 1

        logger.info("Carried %d assignment(s) from %s to %s for site %s", carried, source_date, attendance_date, site_id)
        return out

    def _booked_on(self, attendance_date: date) -> dict[tuple, DailySlot]:
        # Every site counts, including this site's temporary slots created ahead of generation.
        return {
            (s.assigned_guard_id, s.shift_type): s
            for s in self._slots.list_assigned_for_date(attendance_date=attendance_date)
        }
