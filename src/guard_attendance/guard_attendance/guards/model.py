from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import GuardStatus


@dataclass(frozen=True)
class Guard:
    """Guard directory entry (records are owned by the guard CRUD module)."""

    guard_id: int
    name: str
    badge_number: Optional[str] = None
    status: GuardStatus = GuardStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == GuardStatus.ACTIVE
