from __future__ import annotations

from datetime import date
from decimal import Decimal

from guard_attendance.core.enums import ShiftType
from guard_attendance.slots.carry_forward import CarryForwardResolver
from guard_attendance.slots.memory_repository import InMemorySlotRepository
from guard_attendance.slots.model import NewSlot

SITE = 1
YESTERDAY = date(2024, 1, 1)
TODAY = date(2024, 1, 2)


def _slot(site_id, day, shift, number, *, guard=None, present=None, rate=None, temporary=False, role="Guard"):
    return NewSlot(
        site_id=site_id,
        attendance_date=day,
        shift_type=shift,
        role_type=role,
        slot_number=number,
        assigned_guard_id=guard,
        is_present=present,
        pay_rate=rate,
        is_temporary=temporary,
    )


def test_carries_guard_and_rate_but_never_presence():
    repo = InMemorySlotRepository()
    repo.insert_slots(
        [
            _slot(SITE, YESTERDAY, ShiftType.DAY, 1, guard=10, present=True, rate=Decimal("950")),
            _slot(SITE, YESTERDAY, ShiftType.NIGHT, 1, guard=11, present=False),
        ]
    )
    new = [
        _slot(SITE, TODAY, ShiftType.DAY, 1, rate=Decimal("850")),
        _slot(SITE, TODAY, ShiftType.NIGHT, 1, rate=Decimal("850")),
        _slot(SITE, TODAY, ShiftType.DAY, 2, rate=Decimal("850")),
    ]

    out = CarryForwardResolver(repo).apply_carry_forward(new, SITE, TODAY)

    assert [(s.assigned_guard_id, s.is_present, s.pay_rate) for s in out] == [
        (10, None, Decimal("950")),
        (11, None, Decimal("850")),
        (None, None, Decimal("850")),
    ]


def test_only_matching_role_shift_and_number_are_carried():
    repo = InMemorySlotRepository()
    repo.insert_slots([_slot(SITE, YESTERDAY, ShiftType.DAY, 1, guard=10, role="Supervisor")])

    out = CarryForwardResolver(repo).apply_carry_forward([_slot(SITE, TODAY, ShiftType.DAY, 1)], SITE, TODAY)

    assert out[0].assigned_guard_id is None


def test_temporary_flag_travels_with_the_assignment():
    repo = InMemorySlotRepository()
    repo.insert_slots([_slot(SITE, YESTERDAY, ShiftType.DAY, 2, guard=10, temporary=True)])

    out = CarryForwardResolver(repo).apply_carry_forward([_slot(SITE, TODAY, ShiftType.DAY, 2)], SITE, TODAY)

    assert out[0].assigned_guard_id == 10
    assert out[0].is_temporary is True


def test_other_sites_previous_day_is_ignored():
    repo = InMemorySlotRepository()
    repo.insert_slots([_slot(2, YESTERDAY, ShiftType.DAY, 1, guard=10)])

    out = CarryForwardResolver(repo).apply_carry_forward([_slot(SITE, TODAY, ShiftType.DAY, 1)], SITE, TODAY)

    assert out[0].assigned_guard_id is None


def test_guard_already_booked_elsewhere_today_is_left_open():
    repo = InMemorySlotRepository()
    repo.insert_slots(
        [
            _slot(SITE, YESTERDAY, ShiftType.DAY, 1, guard=10),
            _slot(2, TODAY, ShiftType.DAY, 1, guard=10),
        ]
    )

    out = CarryForwardResolver(repo).apply_carry_forward([_slot(SITE, TODAY, ShiftType.DAY, 1)], SITE, TODAY)

    assert out[0].assigned_guard_id is None
    assert out[0].is_present is None


def test_guard_on_own_temporary_slot_today_is_left_open():
    repo = InMemorySlotRepository()
    repo.insert_slots(
        [
            _slot(SITE, YESTERDAY, ShiftType.DAY, 1, guard=7),
            _slot(SITE, TODAY, ShiftType.DAY, 1, guard=7, temporary=True, role="Extra"),
        ]
    )

    out = CarryForwardResolver(repo).apply_carry_forward([_slot(SITE, TODAY, ShiftType.DAY, 1)], SITE, TODAY)

    assert out[0].assigned_guard_id is None
