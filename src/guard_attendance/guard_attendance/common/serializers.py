from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from ..guards.model import Guard
from ..slots.model import DailySlot, ShiftSummary


def _money(value: Optional[Decimal]) -> Optional[str]:
    return str(value) if value is not None else None


def slot_to_dict(slot: DailySlot) -> dict[str, Any]:
    return {
        "id": slot.slot_id,
        "site_id": slot.site_id,
        "attendance_date": slot.attendance_date.strftime("%Y-%m-%d"),
        "shift_type": slot.shift_type.value,
        "role_type": slot.role_type,
        "slot_number": slot.slot_number,
        "assigned_guard_id": slot.assigned_guard_id,
        "is_present": slot.is_present,
        "pay_rate": _money(slot.pay_rate),
        "is_temporary": slot.is_temporary,
        "status": slot.presence_status.value,
    }


def summary_to_dict(summary: ShiftSummary) -> dict[str, Any]:
    return {
        "shift_type": summary.shift_type.value,
        "total": summary.total,
        "assigned": summary.assigned,
        "present": summary.present,
        "absent": summary.absent,
        "pending": summary.pending,
        "open": summary.open,
    }


def guard_to_dict(guard: Guard) -> dict[str, Any]:
    return {
        "id": guard.guard_id,
        "name": guard.name,
        "badge_number": guard.badge_number,
        "status": guard.status.value,
    }
