from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Guard


class GuardRepository(Protocol):
    def get_by_id(self, guard_id: int) -> Optional[Guard]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Guard]:
        raise NotImplementedError
