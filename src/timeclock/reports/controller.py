from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_or_none
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports", methods=["GET"], endpoint="attendance_report")
    def attendance_report():
        events = container.report_service.query(
            requester_id=request.args.get("requesterId", ""),
            target_user_id=request.args.get("targetUserId"),
            start=parse_iso_or_none(request.args.get("from")),
            end=parse_iso_or_none(request.args.get("to")),
        )

        if request.args.get("format", "").lower() == "csv":
            return app.response_class(
                container.report_service.to_csv(events, zone=container.zone),
                mimetype="text/csv",
                headers={"Content-Disposition": "attachment; filename=attendance_report.csv"},
            )
        return jsonify({"success": True, "events": [e.to_dict(container.zone) for e in events]})
