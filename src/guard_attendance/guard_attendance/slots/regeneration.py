from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence, Union

from .model import DailySlot, NewSlot, SlotPosition

logger = logging.getLogger(__name__)


def merge_regenerated_slots(
    new_slots: Sequence[NewSlot],
    old_slots: Sequence[Union[DailySlot, NewSlot]],
) -> list[NewSlot]:
    """Restore assignments from a previous slot set onto a freshly derived one.

    Slots are matched by (role_type, slot_number, shift_type). Where the old
    slot held a guard, its guard, presence mark and pay rate (when set) are
    copied over. Old positions that no longer exist are dropped.
    """

    old_by_position: dict[SlotPosition, Union[DailySlot, NewSlot]] = {
        s.position: s for s in old_slots if s.assigned_guard_id is not None
    }

    merged: list[NewSlot] = []
    restored = 0
    for new in new_slots:
        old = old_by_position.pop(new.position, None)
        if old is None:
            merged.append(new)
            continue
        merged.append(
            replace(
                new,
                assigned_guard_id=old.assigned_guard_id,
                is_present=old.is_present,
                pay_rate=old.pay_rate if old.pay_rate is not None else new.pay_rate,
            )
        )
        restored += 1

    if old_by_position:
        logger.info(
            "Regeneration dropped %d assigned slot(s) no longer in staffing requirements: %s",
            len(old_by_position),
            sorted(f"{shift.value}/{role}#{number}" for role, number, shift in old_by_position),
        )
    logger.debug("Regeneration restored %d assignment(s)", restored)
    return merged
