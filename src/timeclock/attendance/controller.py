from __future__ import annotations

from typing import Any, Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_or_none
from ..common.validators import coerce_coordinate
from ..container import Container
from ..core.exceptions import ValidationError


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["POST"], endpoint="record_event")
    def record_event():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")

        event = container.attendance_service.record_event(
            _text(payload.get("userId")),
            _text(payload.get("eventType")),
            _text(payload.get("evidenceRef")),
            note=_text(payload.get("note")),
            latitude=coerce_coordinate(payload.get("lat")),
            longitude=coerce_coordinate(payload.get("lon")),
        )
        return jsonify(event.to_dict(container.zone)), 201

    @app.route("/api/attendance", methods=["GET"], endpoint="list_my_events")
    def list_my_events():
        events = container.attendance_service.list_history(
            request.args.get("userId", ""),
            start=parse_iso_or_none(request.args.get("from")),
            end=parse_iso_or_none(request.args.get("to")),
        )
        return jsonify({"success": True, "events": [e.to_dict(container.zone) for e in events]})
