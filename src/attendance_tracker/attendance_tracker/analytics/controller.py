from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_utc, parse_iso_date
from ..core.constants import DEFAULT_CALENDAR_MONTHS, DEFAULT_TREND_WINDOW, MAX_CALENDAR_MONTHS
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _failed(message: str):
    return jsonify({"success": False, "message": message}), 500


def register(app: Flask, container: Container) -> None:
    @app.route("/api/analytics/dashboard", endpoint="analytics_dashboard")
    def dashboard():
        window = request.args.get("window", DEFAULT_TREND_WINDOW, type=int)
        try:
            report = container.analytics_service.build_dashboard(now=now_utc(), trend_window=window)
        except Exception:
            logger.exception("Failed to build dashboard")
            return _failed("Could not load statistics")
        return jsonify({"success": True, **report.to_dict()})

    @app.route("/api/analytics/students/<student_id>", endpoint="analytics_student")
    def student_report(student_id: str):
        months = request.args.get("months", DEFAULT_CALENDAR_MONTHS, type=int)
        if not 0 <= months <= MAX_CALENDAR_MONTHS:
            return jsonify({"success": False, "message": f"months must be between 0 and {MAX_CALENDAR_MONTHS}"}), 400
        try:
            report = container.analytics_service.build_student_report(student_id, now=now_utc(), months_back=months)
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except Exception:
            logger.exception("Failed to build report for student %s", student_id)
            return _failed("Could not load student statistics")
        return jsonify({"success": True, **report.to_dict()})

    @app.route("/api/analytics/trend", endpoint="analytics_trend")
    def trend():
        window = request.args.get("window", DEFAULT_TREND_WINDOW, type=int)
        try:
            points = container.analytics_service.trend(window_size=window)
        except Exception:
            logger.exception("Failed to build trend")
            return _failed("Could not load trend")
        return jsonify({"success": True, "trend": [p.to_dict() for p in points]})

    @app.route("/api/analytics/summary/<record_date>", endpoint="analytics_summary")
    def summary(record_date: str):
        try:
            day = parse_iso_date(record_date)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        try:
            text = container.analytics_service.daily_summary(day)
        except Exception:
            logger.exception("Failed to build summary for %s", record_date)
            return _failed("Could not build summary")
        return jsonify({"success": True, "summary": text})
