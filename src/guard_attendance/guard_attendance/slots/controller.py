from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.serializers import slot_to_dict, summary_to_dict
from ..common.validators import parse_optional_bool
from ..core.constants import DEFAULT_GUARD_HISTORY_DAYS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sites/<int:site_id>/slots/<date_s>", methods=["GET"], endpoint="slots_list")
    def slots_list(site_id: int, date_s: str):
        attendance_date = parse_iso_date(date_s)
        slots = container.slot_query_service.list_slots(site_id, attendance_date)
        return jsonify({"success": True, "slots": [slot_to_dict(s) for s in slots]})

    @app.route("/api/sites/<int:site_id>/slots/<date_s>/generate", methods=["POST"], endpoint="slots_generate")
    def slots_generate(site_id: int, date_s: str):
        attendance_date = parse_iso_date(date_s)
        data = request.get_json(silent=True) or {}
        force = bool(parse_optional_bool(data.get("force"), "force"))

        slots = container.slot_generator.generate_slots_for_date(site_id, attendance_date, force_regenerate=force)
        return jsonify({"success": True, "slots": [slot_to_dict(s) for s in slots]})

    @app.route("/api/sites/<int:site_id>/slots/<date_s>/summary", methods=["GET"], endpoint="slots_summary")
    def slots_summary(site_id: int, date_s: str):
        attendance_date = parse_iso_date(date_s)
        summary = container.slot_query_service.summarize(site_id, attendance_date)
        return jsonify({"success": True, "summary": [summary_to_dict(s) for s in summary]})

    @app.route(
        "/api/sites/<int:site_id>/slots/<date_s>/copy-from/<from_s>",
        methods=["POST"],
        endpoint="slots_copy_forward",
    )
    def slots_copy_forward(site_id: int, date_s: str, from_s: str):
        to_date = parse_iso_date(date_s)
        from_date = parse_iso_date(from_s)

        slots = container.copy_forward_service.copy_forward(site_id, from_date, to_date)
        return jsonify({"success": True, "slots": [slot_to_dict(s) for s in slots]})

    @app.route("/api/guards/<int:guard_id>/slots", methods=["GET"], endpoint="guard_slots")
    def guard_slots(guard_id: int):
        today = today_local()
        start_s = request.args.get("start") or (today - timedelta(days=DEFAULT_GUARD_HISTORY_DAYS)).strftime("%Y-%m-%d")
        end_s = request.args.get("end") or today.strftime("%Y-%m-%d")

        slots = container.slot_query_service.slots_for_guard(guard_id, parse_iso_date(start_s), parse_iso_date(end_s))
        return jsonify({"success": True, "slots": [slot_to_dict(s) for s in slots]})
