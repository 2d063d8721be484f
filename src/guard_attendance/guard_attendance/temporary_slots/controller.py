from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.serializers import slot_to_dict
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route(
        "/api/sites/<int:site_id>/slots/<date_s>/temporary",
        methods=["GET", "POST"],
        endpoint="temporary_slots",
    )
    def temporary_slots(site_id: int, date_s: str):
        attendance_date = parse_iso_date(date_s)

        if request.method == "POST":
            data = request.get_json(silent=True) or {}
            slot = container.temporary_slot_service.create_temporary_slot(
                site_id,
                attendance_date,
                data.get("shift_type"),
                data.get("role_type"),
                guard_id=data.get("guard_id"),
                pay_rate=data.get("pay_rate"),
            )
            return jsonify({"success": True, "slot": slot_to_dict(slot)}), 201

        slots = container.temporary_slot_service.list_temporary_slots(site_id, attendance_date)
        return jsonify({"success": True, "slots": [slot_to_dict(s) for s in slots]})

    @app.route("/api/temporary-slots/<int:slot_id>", methods=["PATCH"], endpoint="temporary_slot_update")
    def temporary_slot_update(slot_id: int):
        data = request.get_json(silent=True) or {}
        fields = {k: v for k, v in data.items() if k != "slot_id"}
        slot = container.temporary_slot_service.update_temporary_slot(slot_id, **fields)
        return jsonify({"success": True, "slot": slot_to_dict(slot)})

    @app.route("/api/temporary-slots/<int:slot_id>", methods=["DELETE"], endpoint="temporary_slot_delete")
    def temporary_slot_delete(slot_id: int):
        container.temporary_slot_service.delete_temporary_slot(slot_id)
        return jsonify({"success": True})
