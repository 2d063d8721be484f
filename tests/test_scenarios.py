"""End-to-end walks through the daily roster, wired the way the app wires them."""

from __future__ import annotations

from datetime import date

import pytest

from guard_attendance.container import build_memory_container
from guard_attendance.core.enums import ShiftType
from guard_attendance.core.exceptions import ConflictError
from guard_attendance.guards.memory_repository import InMemoryGuardRepository
from guard_attendance.guards.model import Guard
from guard_attendance.staffing.memory_repository import InMemoryStaffingRepository

SITE_S = 1
SITE_T = 2
G = 10
G2 = 11

JAN1 = date(2024, 1, 1)
JAN2 = date(2024, 1, 2)
JAN3 = date(2024, 1, 3)


@pytest.fixture
def c():
    staffing = InMemoryStaffingRepository()
    staffing.add(site_id=SITE_S, role_type="Guard", day_slots=2, night_slots=1, budget_per_slot="850")
    staffing.add(site_id=SITE_T, role_type="Guard", day_slots=1, night_slots=1, budget_per_slot="900")
    guards = InMemoryGuardRepository([Guard(G, "Arjun Mehta"), Guard(G2, "Priya Nair")])
    return build_memory_container(staffing_repo=staffing, guards_repo=guards)


def _find(slots, shift, number, role="Guard"):
    return next(s for s in slots if (s.shift_type, s.slot_number, s.role_type) == (shift, number, role))


def _assert_store_invariants(repo):
    rows = repo.all()
    positions = [(s.site_id, s.attendance_date, s.shift_type, s.role_type, s.slot_number) for s in rows]
    assert len(positions) == len(set(positions))
    bookings = [(s.assigned_guard_id, s.attendance_date, s.shift_type) for s in rows if s.assigned_guard_id is not None]
    assert len(bookings) == len(set(bookings))
    assert all(s.is_present is None for s in rows if s.assigned_guard_id is None)


def test_generate_baseline_for_configured_site(c):
    slots = c.slot_generator.generate_slots_for_date(SITE_S, JAN1)

    assert [(s.shift_type, s.slot_number) for s in slots] == [
        (ShiftType.DAY, 1),
        (ShiftType.DAY, 2),
        (ShiftType.NIGHT, 1),
    ]
    assert all(s.assigned_guard_id is None for s in slots)


def test_guard_cannot_work_two_sites_in_the_same_shift(c):
    s_slots = c.slot_generator.generate_slots_for_date(SITE_S, JAN1)
    t_slots = c.slot_generator.generate_slots_for_date(SITE_T, JAN1)
    c.assignment_service.assign_guard(_find(s_slots, ShiftType.DAY, 1).slot_id, G)

    with pytest.raises(ConflictError):
        c.assignment_service.assign_guard(_find(t_slots, ShiftType.DAY, 1).slot_id, G)

    night = c.assignment_service.assign_guard(_find(t_slots, ShiftType.NIGHT, 1).slot_id, G)
    assert night.assigned_guard_id == G
    _assert_store_invariants(c.slots_repo)


def test_replacing_a_present_guard_resets_presence(c):
    day1 = _find(c.slot_generator.generate_slots_for_date(SITE_S, JAN1), ShiftType.DAY, 1)
    c.assignment_service.assign_guard(day1.slot_id, G)
    c.attendance_marker.mark_attendance(day1.slot_id, True)

    replaced = c.assignment_service.replace_guard(day1.slot_id, G2)

    assert (replaced.assigned_guard_id, replaced.is_present) == (G2, None)


def test_next_day_carries_guard_but_not_presence(c):
    day1 = _find(c.slot_generator.generate_slots_for_date(SITE_S, JAN1), ShiftType.DAY, 1)
    c.assignment_service.assign_guard(day1.slot_id, G)
    c.attendance_marker.mark_attendance(day1.slot_id, True)

    jan2 = c.slot_generator.generate_slots_for_date(SITE_S, JAN2)

    carried = _find(jan2, ShiftType.DAY, 1)
    assert (carried.assigned_guard_id, carried.is_present) == (G, None)
    assert _find(jan2, ShiftType.DAY, 2).assigned_guard_id is None
    _assert_store_invariants(c.slots_repo)


def test_copy_forward_keeps_guard_and_marks_present(c):
    day1 = _find(c.slot_generator.generate_slots_for_date(SITE_S, JAN1), ShiftType.DAY, 1)
    c.assignment_service.assign_guard(day1.slot_id, G)
    c.attendance_marker.mark_attendance(day1.slot_id, True)

    copied = c.copy_forward_service.copy_forward(SITE_S, JAN1, JAN3)

    clone = _find(copied, ShiftType.DAY, 1)
    assert clone.attendance_date == JAN3
    assert (clone.assigned_guard_id, clone.is_present) == (G, True)
    assert all(s.is_present is None for s in copied if s.assigned_guard_id is None)


def test_regeneration_keeps_assignments_and_temporary_slots(c):
    slots = c.slot_generator.generate_slots_for_date(SITE_S, JAN1)
    day2 = _find(slots, ShiftType.DAY, 2)
    c.assignment_service.assign_guard(day2.slot_id, G)
    c.attendance_marker.mark_attendance(day2.slot_id, False)
    temp = c.temporary_slot_service.create_temporary_slot(SITE_S, JAN1, "day", "Guard", guard_id=G2)

    regenerated = c.slot_generator.generate_slots_for_date(SITE_S, JAN1, force_regenerate=True)

    restored = _find([s for s in regenerated if not s.is_temporary], ShiftType.DAY, 2)
    assert (restored.assigned_guard_id, restored.is_present) == (G, False)
    assert [s.slot_id for s in regenerated if s.is_temporary] == [temp.slot_id]
    assert temp.slot_number == 3
    _assert_store_invariants(c.slots_repo)


def test_generation_is_idempotent_without_force(c):
    first = c.slot_generator.generate_slots_for_date(SITE_S, JAN1)
    c.assignment_service.assign_guard(first[0].slot_id, G)

    second = c.slot_generator.generate_slots_for_date(SITE_S, JAN1)

    assert [s.slot_id for s in second] == [s.slot_id for s in first]
    assert second[0].assigned_guard_id == G


def test_mixed_operations_never_double_book_a_guard(c):
    s1 = c.slot_generator.generate_slots_for_date(SITE_S, JAN1)
    t1 = c.slot_generator.generate_slots_for_date(SITE_T, JAN1)
    c.assignment_service.assign_guard(_find(s1, ShiftType.DAY, 1).slot_id, G)
    c.assignment_service.assign_guard(_find(t1, ShiftType.DAY, 1).slot_id, G2)
    c.attendance_marker.mark_all_present(SITE_S, JAN1)

    # G is already working a temporary slot at S on the 2nd, G2 one at T.
    c.temporary_slot_service.create_temporary_slot(SITE_S, JAN2, "day", "Relief", guard_id=G)
    c.temporary_slot_service.create_temporary_slot(SITE_S, JAN2, "night", "Guard", guard_id=G2)

    s2 = c.slot_generator.generate_slots_for_date(SITE_S, JAN2)
    t2 = c.slot_generator.generate_slots_for_date(SITE_T, JAN2)
    c.copy_forward_service.copy_forward(SITE_S, JAN1, JAN3)
    c.copy_forward_service.copy_forward(SITE_T, JAN1, JAN3)

    assert _find([s for s in s2 if not s.is_temporary], ShiftType.DAY, 1).assigned_guard_id is None
    assert _find(t2, ShiftType.DAY, 1).assigned_guard_id == G2

    rows = c.slots_repo.all()
    for day in (JAN1, JAN2, JAN3):
        for shift in ShiftType:
            guards = [s.assigned_guard_id for s in rows if (s.attendance_date, s.shift_type) == (day, shift) and s.assigned_guard_id]
            assert len(guards) == len(set(guards))
    _assert_store_invariants(c.slots_repo)
