from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import GuardStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Guard
from .repository import GuardRepository


def _to_guard(r: dict[str, Any]) -> Guard:
    return Guard(
        guard_id=int(r["guard_id"]),
        name=r["name"],
        badge_number=r.get("badge_number"),
        status=GuardStatus(r["status"]),
    )


class MySQLGuardRepository(GuardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, guard_id: int) -> Optional[Guard]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT guard_id, name, badge_number, status FROM guards WHERE guard_id=%s",
                (int(guard_id),),
            )
            r = fetchone(cur)
            return _to_guard(r) if r else None

    def list_active(self) -> Sequence[Guard]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT guard_id, name, badge_number, status
                FROM guards
                WHERE status=%s
                ORDER BY name
                """,
                (GuardStatus.ACTIVE.value,),
            )
            return [_to_guard(r) for r in fetchall(cur)]
