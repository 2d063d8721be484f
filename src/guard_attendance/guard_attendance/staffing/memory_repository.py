from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Sequence

from .model import StaffingRequirement
from .repository import StaffingRepository


class InMemoryStaffingRepository(StaffingRepository):
    def __init__(self, requirements: Iterable[StaffingRequirement] = ()):
        self._rows: list[StaffingRequirement] = list(requirements)

    def list_for_site(self, site_id: int) -> Sequence[StaffingRequirement]:
        return [r for r in self._rows if r.site_id == int(site_id)]

    def set_for_site(self, site_id: int, requirements: Iterable[StaffingRequirement]) -> None:
        """Replace a site's requirements (stand-in for the site management screens)."""

        self._rows = [r for r in self._rows if r.site_id != int(site_id)]
        self._rows.extend(requirements)

    def add(
        self,
        *,
        site_id: int,
        role_type: str,
        day_slots: int,
        night_slots: int,
        budget_per_slot: Decimal | str | int = 0,
    ) -> StaffingRequirement:
        req = StaffingRequirement(
            site_id=int(site_id),
            role_type=role_type,
            day_slots=int(day_slots),
            night_slots=int(night_slots),
            budget_per_slot=Decimal(str(budget_per_slot)),
        )
        self._rows.append(req)
        return req
