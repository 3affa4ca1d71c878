from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import ValidationError
from ..students.repository import StudentRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: mark and read daily attendance."""

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def list_records(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all()

    def get_record(self, record_date: str) -> Optional[AttendanceRecord]:
        parse_iso_date(record_date)
        return self._attendance.get_for_date(record_date)

    def mark_attendance(self, record_date: str, present_ids: Iterable[str]) -> AttendanceRecord:
        parse_iso_date(record_date)
        present = set(present_ids)

        known = {s.student_id for s in self._students.list_all()}
        unknown = sorted(present - known)
        if unknown:
            raise ValidationError(f"Unknown student ids: {', '.join(unknown)}")

        record = self._attendance.upsert(record_date=record_date, present_ids=present)
        logger.info("Saved attendance for %s (%d present)", record_date, record.present_count)
        return record
