from __future__ import annotations

from datetime import date

import pytest

from guard_attendance.attendance.service import AttendanceMarker
from guard_attendance.core.enums import ShiftType
from guard_attendance.core.exceptions import InvalidStateError, NotFoundError
from guard_attendance.slots.memory_repository import InMemorySlotRepository
from guard_attendance.slots.model import NewSlot

DAY = date(2024, 1, 1)


def _slot(number, *, guard=None, present=None, site_id=1):
    return NewSlot(
        site_id=site_id,
        attendance_date=DAY,
        shift_type=ShiftType.DAY,
        role_type="Guard",
        slot_number=number,
        assigned_guard_id=guard,
        is_present=present,
    )


def test_mark_and_correct_attendance():
    repo = InMemorySlotRepository()
    slot = repo.insert_slots([_slot(1, guard=10)])[0]
    marker = AttendanceMarker(repo)

    assert marker.mark_attendance(slot.slot_id, True).is_present is True
    assert marker.mark_attendance(slot.slot_id, False).is_present is False
    assert repo.get_by_id(slot.slot_id).is_present is False


def test_unassigned_slot_cannot_be_marked():
    repo = InMemorySlotRepository()
    slot = repo.insert_slots([_slot(1)])[0]

    with pytest.raises(InvalidStateError):
        AttendanceMarker(repo).mark_attendance(slot.slot_id, True)

    assert repo.get_by_id(slot.slot_id).is_present is None


def test_missing_slot():
    with pytest.raises(NotFoundError):
        AttendanceMarker(InMemorySlotRepository()).mark_attendance(42, True)


def test_mark_all_present_only_touches_pending_assigned_slots():
    repo = InMemorySlotRepository()
    pending, absent, open_slot, other_site = repo.insert_slots(
        [_slot(1, guard=10), _slot(2, guard=11, present=False), _slot(3), _slot(1, guard=12, site_id=2)]
    )

    marked = AttendanceMarker(repo).mark_all_present(1, DAY)

    assert [s.slot_id for s in marked] == [pending.slot_id]
    assert repo.get_by_id(pending.slot_id).is_present is True
    assert repo.get_by_id(absent.slot_id).is_present is False
    assert repo.get_by_id(open_slot.slot_id).is_present is None
    assert repo.get_by_id(other_site.slot_id).is_present is None


def test_mark_all_present_with_nothing_pending():
    repo = InMemorySlotRepository()
    repo.insert_slots([_slot(1, guard=10, present=True), _slot(2)])

    with pytest.raises(InvalidStateError):
        AttendanceMarker(repo).mark_all_present(1, DAY)
