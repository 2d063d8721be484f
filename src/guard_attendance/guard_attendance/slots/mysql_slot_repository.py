from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..core.enums import ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    normalize_mysql_bool,
    normalize_mysql_decimal,
    translate_integrity_errors,
)
from .model import DailySlot, NewSlot
from .repository import SlotRepository

_COLUMNS = """
    slot_id, site_id, attendance_date, shift_type, role_type, slot_number,
    assigned_guard_id, is_present, pay_rate, is_temporary
"""

_ORDER = "ORDER BY attendance_date, site_id, FIELD(shift_type, 'day', 'night'), role_type, slot_number"


def _to_slot(r: dict[str, Any]) -> DailySlot:
    guard = r.get("assigned_guard_id")
    return DailySlot(
        slot_id=int(r["slot_id"]),
        site_id=int(r["site_id"]),
        attendance_date=r["attendance_date"],
        shift_type=ShiftType(r["shift_type"]),
        role_type=r["role_type"],
        slot_number=int(r["slot_number"]),
        assigned_guard_id=int(guard) if guard is not None else None,
        is_present=normalize_mysql_bool(r.get("is_present")),
        pay_rate=normalize_mysql_decimal(r.get("pay_rate")),
        is_temporary=bool(r.get("is_temporary")),
    )


class MySQLSlotRepository(SlotRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # -------- reads --------
    def get_by_id(self, slot_id: int) -> Optional[DailySlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._get(cur, slot_id)

    def list_for_site_and_date(
        self,
        *,
        site_id: int,
        attendance_date: date,
        is_temporary: Optional[bool] = None,
        assigned_only: bool = False,
    ) -> Sequence[DailySlot]:
        clauses = ["site_id=%s", "attendance_date=%s"]
        params: list[object] = [int(site_id), attendance_date]
        if is_temporary is not None:
            clauses.append("is_temporary=%s")
            params.append(1 if is_temporary else 0)
        if assigned_only:
            clauses.append("assigned_guard_id IS NOT NULL")

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM daily_attendance_slots WHERE {where} {_ORDER}", tuple(params))
            return [_to_slot(r) for r in fetchall(cur)]

    def list_for_guard(self, *, guard_id: int, start: date, end: date) -> Sequence[DailySlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_attendance_slots
                WHERE assigned_guard_id=%s AND attendance_date BETWEEN %s AND %s
                {_ORDER}
                """,
                (int(guard_id), start, end),
            )
            return [_to_slot(r) for r in fetchall(cur)]

    def list_assigned_for_date(self, *, attendance_date: date, shift_type: Optional[ShiftType] = None) -> Sequence[DailySlot]:
        clauses = ["attendance_date=%s", "assigned_guard_id IS NOT NULL"]
        params: list[object] = [attendance_date]
        if shift_type is not None:
            clauses.append("shift_type=%s")
            params.append(shift_type.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM daily_attendance_slots WHERE {where} {_ORDER}", tuple(params))
            return [_to_slot(r) for r in fetchall(cur)]

    def find_guard_conflict(
        self,
        *,
        guard_id: int,
        attendance_date: date,
        shift_type: ShiftType,
        exclude_slot_id: Optional[int] = None,
    ) -> Optional[DailySlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_attendance_slots
                WHERE assigned_guard_id=%s AND attendance_date=%s AND shift_type=%s AND slot_id<>%s
                LIMIT 1
                """,
                (int(guard_id), attendance_date, shift_type.value, int(exclude_slot_id or 0)),
            )
            r = fetchone(cur)
            return _to_slot(r) if r else None

    def max_slot_number(self, *, site_id: int, attendance_date: date, shift_type: ShiftType, role_type: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(MAX(slot_number), 0) AS max_number
                FROM daily_attendance_slots
                WHERE site_id=%s AND attendance_date=%s AND shift_type=%s AND role_type=%s
                """,
                (int(site_id), attendance_date, shift_type.value, role_type),
            )
            r = fetchone(cur)
            return int(r["max_number"]) if r else 0

    # -------- writes --------
    def insert_slots(self, slots: Sequence[NewSlot]) -> Sequence[DailySlot]:
        with translate_integrity_errors(), db_cursor(self._conn_factory) as (_, cur):
            return self._insert(cur, slots)

    def replace_slots(
        self,
        *,
        site_id: int,
        attendance_date: date,
        slots: Sequence[NewSlot],
        baseline_only: bool,
    ) -> Sequence[DailySlot]:
        scope = " AND is_temporary=0" if baseline_only else ""
        with translate_integrity_errors(), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"DELETE FROM daily_attendance_slots WHERE site_id=%s AND attendance_date=%s{scope}",
                (int(site_id), attendance_date),
            )
            return self._insert(cur, slots)

    def set_assignment(self, *, slot_id: int, guard_id: Optional[int], is_present: Optional[bool]) -> Optional[DailySlot]:
        with translate_integrity_errors(), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE daily_attendance_slots SET assigned_guard_id=%s, is_present=%s WHERE slot_id=%s",
                (guard_id, is_present, int(slot_id)),
            )
            return self._get(cur, slot_id)

    def set_presence(self, *, slot_id: int, is_present: Optional[bool]) -> Optional[DailySlot]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE daily_attendance_slots SET is_present=%s WHERE slot_id=%s",
                (is_present, int(slot_id)),
            )
            return self._get(cur, slot_id)

    def update_temporary(
        self,
        *,
        slot_id: int,
        assigned_guard_id: Optional[int],
        is_present: Optional[bool],
        pay_rate: Optional[Decimal],
    ) -> Optional[DailySlot]:
        with translate_integrity_errors(), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE daily_attendance_slots
                SET assigned_guard_id=%s, is_present=%s, pay_rate=%s
                WHERE slot_id=%s AND is_temporary=1
                """,
                (assigned_guard_id, is_present, pay_rate, int(slot_id)),
            )
            slot = self._get(cur, slot_id)
            return slot if slot and slot.is_temporary else None

    def delete_temporary(self, *, slot_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM daily_attendance_slots WHERE slot_id=%s AND is_temporary=1", (int(slot_id),))
            return cur.rowcount > 0

    # -------- internals --------
    @staticmethod
    def _get(cur, slot_id: int) -> Optional[DailySlot]:
        cur.execute(f"SELECT {_COLUMNS} FROM daily_attendance_slots WHERE slot_id=%s", (int(slot_id),))
        r = fetchone(cur)
        return _to_slot(r) if r else None

    def _insert(self, cur, slots: Sequence[NewSlot]) -> list[DailySlot]:
        created: list[DailySlot] = []
        for s in slots:
            cur.execute(
                """
                INSERT INTO daily_attendance_slots(
                    site_id, attendance_date, shift_type, role_type, slot_number,
                    assigned_guard_id, is_present, pay_rate, is_temporary
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(s.site_id),
                    s.attendance_date,
                    s.shift_type.value,
                    s.role_type,
                    int(s.slot_number),
                    s.assigned_guard_id,
                    s.is_present,
                    s.pay_rate,
                    1 if s.is_temporary else 0,
                ),
            )
            created.append(
                DailySlot(
                    slot_id=int(cur.lastrowid),
                    site_id=int(s.site_id),
                    attendance_date=s.attendance_date,
                    shift_type=s.shift_type,
                    role_type=s.role_type,
                    slot_number=int(s.slot_number),
                    assigned_guard_id=s.assigned_guard_id,
                    is_present=s.is_present,
                    pay_rate=s.pay_rate,
                    is_temporary=bool(s.is_temporary),
                )
            )
        return created
