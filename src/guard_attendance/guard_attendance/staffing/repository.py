from __future__ import annotations

from typing import Protocol, Sequence

from .model import StaffingRequirement


class StaffingRepository(Protocol):
    def list_for_site(self, site_id: int) -> Sequence[StaffingRequirement]:
        """Read-only: staffing requirements owned by the site management module."""

        raise NotImplementedError
