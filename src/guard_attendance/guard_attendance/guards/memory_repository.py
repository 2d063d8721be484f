from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .model import Guard
from .repository import GuardRepository


class InMemoryGuardRepository(GuardRepository):
    def __init__(self, guards: Iterable[Guard] = ()):
        self._by_id: dict[int, Guard] = {g.guard_id: g for g in guards}

    def add(self, guard: Guard) -> Guard:
        self._by_id[guard.guard_id] = guard
        return guard

    def get_by_id(self, guard_id: int) -> Optional[Guard]:
        return self._by_id.get(int(guard_id))

    def list_active(self) -> Sequence[Guard]:
        return sorted((g for g in self._by_id.values() if g.is_active), key=lambda g: g.name)
