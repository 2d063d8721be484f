from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import StaffingRequirement
from .repository import StaffingRepository


class MySQLStaffingRepository(StaffingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_site(self, site_id: int) -> Sequence[StaffingRequirement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT site_id, role_type, day_slots, night_slots, budget_per_slot
                FROM staffing_requirements
                WHERE site_id=%s
                ORDER BY requirement_id
                """,
                (int(site_id),),
            )
            rows = fetchall(cur)
            return [
                StaffingRequirement(
                    site_id=int(r["site_id"]),
                    role_type=r["role_type"],
                    day_slots=int(r["day_slots"] or 0),
                    night_slots=int(r["night_slots"] or 0),
                    budget_per_slot=Decimal(str(r["budget_per_slot"] or 0)),
                )
                for r in rows
            ]
