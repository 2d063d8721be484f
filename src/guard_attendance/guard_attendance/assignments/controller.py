from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import guard_to_dict, slot_to_dict
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _guard_id_from_body():
        data = request.get_json(silent=True) or {}
        return data.get("guard_id")

    @app.route("/api/slots/<int:slot_id>/assign", methods=["POST"], endpoint="slot_assign")
    def slot_assign(slot_id: int):
        slot = container.assignment_service.assign_guard(slot_id, _guard_id_from_body())
        return jsonify({"success": True, "slot": slot_to_dict(slot)})

    @app.route("/api/slots/<int:slot_id>/replace", methods=["POST"], endpoint="slot_replace")
    def slot_replace(slot_id: int):
        slot = container.assignment_service.replace_guard(slot_id, _guard_id_from_body())
        return jsonify({"success": True, "slot": slot_to_dict(slot)})

    @app.route("/api/slots/<int:slot_id>/unassign", methods=["POST"], endpoint="slot_unassign")
    def slot_unassign(slot_id: int):
        slot = container.assignment_service.unassign_guard(slot_id)
        return jsonify({"success": True, "slot": slot_to_dict(slot)})

    @app.route("/api/slots/<int:slot_id>/available-guards", methods=["GET"], endpoint="slot_available_guards")
    def slot_available_guards(slot_id: int):
        guards = container.assignment_service.available_guards(slot_id)
        return jsonify({"success": True, "guards": [guard_to_dict(g) for g in guards]})
