from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .assignments.service import AssignmentService
from .attendance.service import AttendanceMarker
from .database.connection import DatabaseConnection, DBConfig
from .guards.memory_repository import InMemoryGuardRepository
from .guards.mysql_guard_repository import MySQLGuardRepository
from .guards.repository import GuardRepository
from .slots.carry_forward import CarryForwardResolver
from .slots.copy_forward import CopyForwardService
from .slots.generator import SlotGenerator
from .slots.memory_repository import InMemorySlotRepository
from .slots.mysql_slot_repository import MySQLSlotRepository
from .slots.repository import SlotRepository
from .slots.service import SlotQueryService
from .staffing.memory_repository import InMemoryStaffingRepository
from .staffing.mysql_staffing_repository import MySQLStaffingRepository
from .staffing.repository import StaffingRepository
from .temporary_slots.service import TemporarySlotService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    slots_repo: SlotRepository
    staffing_repo: StaffingRepository
    guards_repo: GuardRepository

    slot_generator: SlotGenerator
    slot_query_service: SlotQueryService
    copy_forward_service: CopyForwardService
    assignment_service: AssignmentService
    attendance_marker: AttendanceMarker
    temporary_slot_service: TemporarySlotService


def _wire(
    *,
    conn: Optional[DatabaseConnection],
    slots_repo: SlotRepository,
    staffing_repo: StaffingRepository,
    guards_repo: GuardRepository,
) -> Container:
    return Container(
        conn=conn,
        slots_repo=slots_repo,
        staffing_repo=staffing_repo,
        guards_repo=guards_repo,
        slot_generator=SlotGenerator(slots_repo, staffing_repo, carry_forward=CarryForwardResolver(slots_repo)),
        slot_query_service=SlotQueryService(slots_repo),
        copy_forward_service=CopyForwardService(slots_repo),
        assignment_service=AssignmentService(slots_repo, guards_repo),
        attendance_marker=AttendanceMarker(slots_repo),
        temporary_slot_service=TemporarySlotService(slots_repo, staffing_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return _wire(
        conn=conn,
        slots_repo=MySQLSlotRepository(conn),
        staffing_repo=MySQLStaffingRepository(conn),
        guards_repo=MySQLGuardRepository(conn),
    )


def build_memory_container(
    *,
    staffing_repo: Optional[InMemoryStaffingRepository] = None,
    guards_repo: Optional[InMemoryGuardRepository] = None,
) -> Container:
    return _wire(
        conn=None,
        slots_repo=InMemorySlotRepository(),
        staffing_repo=staffing_repo or InMemoryStaffingRepository(),
        guards_repo=guards_repo or InMemoryGuardRepository(),
    )
