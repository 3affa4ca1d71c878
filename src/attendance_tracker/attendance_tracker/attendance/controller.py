from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance():
        records = container.attendance_service.list_records()
        return jsonify({"success": True, "records": [r.to_dict() for r in records]})

    @app.route("/api/attendance/<record_date>", methods=["GET"], endpoint="get_attendance")
    def get_attendance(record_date: str):
        try:
            record = container.attendance_service.get_record(record_date)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        if record is None:
            return jsonify({"success": False, "message": f"No attendance recorded for {record_date}"}), 404
        return jsonify({"success": True, "record": record.to_dict()})

    @app.route("/api/attendance/<record_date>", methods=["PUT"], endpoint="mark_attendance")
    def mark_attendance(record_date: str):
        payload = request.get_json(silent=True) or {}
        present_ids = payload.get("present_ids")
        if not isinstance(present_ids, list):
            return jsonify({"success": False, "message": "present_ids must be a list"}), 400

        try:
            record = container.attendance_service.mark_attendance(record_date, [str(i) for i in present_ids])
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to save attendance for %s", record_date)
            return jsonify({"success": False, "message": "Could not save attendance"}), 500
        return jsonify({"success": True, "record": record.to_dict()})
