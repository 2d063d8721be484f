"""Example: drive the slot engine through the service layer (no Flask, no MySQL).

Controllers are thin; the business rules live in the services wired by the container.
"""

from datetime import date

from guard_attendance.container import build_memory_container
from guard_attendance.core.exceptions import ConflictError
from guard_attendance.guards.memory_repository import InMemoryGuardRepository
from guard_attendance.guards.model import Guard
from guard_attendance.staffing.memory_repository import InMemoryStaffingRepository


def main():
    staffing = InMemoryStaffingRepository()
    staffing.add(site_id=1, role_type="Security Guard", day_slots=2, night_slots=1, budget_per_slot="850")
    staffing.add(site_id=2, role_type="Security Guard", day_slots=1, night_slots=1, budget_per_slot="900")
    guards = InMemoryGuardRepository([Guard(1, "Arjun Mehta", "SG-1001"), Guard(2, "Priya Nair", "SG-1002")])

    c = build_memory_container(staffing_repo=staffing, guards_repo=guards)

    day1 = date(2024, 1, 1)
    slots = c.slot_generator.generate_slots_for_date(1, day1)
    c.assignment_service.assign_guard(slots[0].slot_id, 1)
    c.attendance_marker.mark_attendance(slots[0].slot_id, True)

    other_site = c.slot_generator.generate_slots_for_date(2, day1)
    try:
        c.assignment_service.assign_guard(other_site[0].slot_id, 1)
    except ConflictError as e:
        print("conflict:", e, "slot:", e.conflicting_slot_id)

    for s in c.slot_generator.generate_slots_for_date(1, date(2024, 1, 2)):
        print(s.shift_type.value, s.role_type, s.slot_number, s.assigned_guard_id, s.is_present)


if __name__ == "__main__":
    main()
