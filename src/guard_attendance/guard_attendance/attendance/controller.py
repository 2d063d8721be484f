from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.serializers import slot_to_dict
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/slots/<int:slot_id>/attendance", methods=["POST"], endpoint="slot_mark_attendance")
    def slot_mark_attendance(slot_id: int):
        data = request.get_json(silent=True) or {}
        is_present = data.get("is_present")
        if not isinstance(is_present, bool):
            raise ValidationError("is_present must be true or false")

        slot = container.attendance_marker.mark_attendance(slot_id, is_present)
        return jsonify({"success": True, "slot": slot_to_dict(slot)})

    @app.route(
        "/api/sites/<int:site_id>/slots/<date_s>/mark-all-present",
        methods=["POST"],
        endpoint="slots_mark_all_present",
    )
    def slots_mark_all_present(site_id: int, date_s: str):
        slots = container.attendance_marker.mark_all_present(site_id, parse_iso_date(date_s))
        return jsonify({"success": True, "slots": [slot_to_dict(s) for s in slots]})
