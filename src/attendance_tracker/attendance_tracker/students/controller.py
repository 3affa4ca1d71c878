from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_utc
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    def list_students():
        students = container.roster_service.list_students()
        return jsonify({"success": True, "students": [s.to_dict() for s in students]})

    @app.route("/api/students", methods=["POST"], endpoint="add_student")
    def add_student():
        payload = request.get_json(silent=True) or {}
        try:
            student = container.roster_service.add_student(str(payload.get("name") or ""), now=now_utc())
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except ConflictError as e:
            return jsonify({"success": False, "message": str(e)}), 409
        return jsonify({"success": True, "student": student.to_dict()}), 201

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="rename_student")
    def rename_student(student_id: str):
        payload = request.get_json(silent=True) or {}
        try:
            container.roster_service.rename_student(student_id, str(payload.get("name") or ""))
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify({"success": True})

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    def delete_student(student_id: str):
        try:
            container.roster_service.delete_student(student_id)
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify({"success": True})
