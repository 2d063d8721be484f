from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class StaffingRequirement:
    """Per site and role: how many day/night slots to open each date, and the default rate."""

    site_id: int
    role_type: str
    day_slots: int
    night_slots: int
    budget_per_slot: Decimal

    @property
    def total_slots(self) -> int:
        return int(self.day_slots) + int(self.night_slots)
