from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from guard_attendance.core.enums import ShiftType
from guard_attendance.core.exceptions import ConflictError, ValidationError
from guard_attendance.slots.copy_forward import CopyForwardService
from guard_attendance.slots.memory_repository import InMemorySlotRepository
from guard_attendance.slots.model import NewSlot

SITE = 1
FROM = date(2024, 1, 1)
TO = date(2024, 1, 3)


def _slot(site_id, day, shift, number, *, guard=None, present=None, rate=None, temporary=False):
    return NewSlot(
        site_id=site_id,
        attendance_date=day,
        shift_type=shift,
        role_type="Guard",
        slot_number=number,
        assigned_guard_id=guard,
        is_present=present,
        pay_rate=rate,
        is_temporary=temporary,
    )


def test_clones_every_slot_and_marks_assigned_present():
    repo = InMemorySlotRepository()
    repo.insert_slots(
        [
            _slot(SITE, FROM, ShiftType.DAY, 1, guard=10, present=False, rate=Decimal("850")),
            _slot(SITE, FROM, ShiftType.DAY, 2),
            _slot(SITE, FROM, ShiftType.NIGHT, 1, guard=11, temporary=True, rate=Decimal("1000")),
        ]
    )

    out = CopyForwardService(repo).copy_forward(SITE, FROM, TO)

    assert [(s.shift_type, s.slot_number, s.assigned_guard_id, s.is_present, s.pay_rate, s.is_temporary) for s in out] == [
        (ShiftType.DAY, 1, 10, True, Decimal("850"), False),
        (ShiftType.DAY, 2, None, None, None, False),
        (ShiftType.NIGHT, 1, 11, True, Decimal("1000"), True),
    ]
    assert all(s.attendance_date == TO for s in out)
    # Source day is untouched.
    assert [s.is_present for s in repo.list_for_site_and_date(site_id=SITE, attendance_date=FROM)] == [False, None, None]


def test_existing_target_slots_are_overwritten():
    repo = InMemorySlotRepository()
    repo.insert_slots(
        [
            _slot(SITE, FROM, ShiftType.DAY, 1, guard=10),
            _slot(SITE, TO, ShiftType.DAY, 1, guard=12, present=False),
            _slot(SITE, TO, ShiftType.DAY, 5, temporary=True),
        ]
    )

    CopyForwardService(repo).copy_forward(SITE, FROM, TO)

    target = repo.list_for_site_and_date(site_id=SITE, attendance_date=TO)
    assert [(s.slot_number, s.assigned_guard_id, s.is_present) for s in target] == [(1, 10, True)]


def test_empty_source_leaves_target_alone():
    repo = InMemorySlotRepository()
    repo.insert_slots([_slot(SITE, TO, ShiftType.DAY, 1, guard=12)])

    assert CopyForwardService(repo).copy_forward(SITE, FROM, TO) == []
    assert len(repo.list_for_site_and_date(site_id=SITE, attendance_date=TO)) == 1


def test_rejects_guard_booked_at_another_site_without_deleting_target():
    repo = InMemorySlotRepository()
    repo.insert_slots(
        [
            _slot(SITE, FROM, ShiftType.DAY, 1, guard=10),
            _slot(SITE, TO, ShiftType.DAY, 1, guard=12),
            _slot(2, TO, ShiftType.DAY, 1, guard=10),
        ]
    )
    other = repo.list_for_site_and_date(site_id=2, attendance_date=TO)[0]

    with pytest.raises(ConflictError) as exc:
        CopyForwardService(repo).copy_forward(SITE, FROM, TO)

    assert exc.value.conflicting_slot_id == other.slot_id
    assert [s.assigned_guard_id for s in repo.list_for_site_and_date(site_id=SITE, attendance_date=TO)] == [12]


def test_same_date_is_rejected():
    with pytest.raises(ValidationError):
        CopyForwardService(InMemorySlotRepository()).copy_forward(SITE, FROM, FROM)
