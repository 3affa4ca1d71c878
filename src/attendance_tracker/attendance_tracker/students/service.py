from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty, require_student_id
from ..core.exceptions import NotFoundError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class RosterService:
    """Use cases: manage the student roster."""

    def __init__(self, students: StudentRepository, attendance: AttendanceRepository):
        self._students = students
        self._attendance = attendance

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def get_student(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError(f"Student {student_id} not found")
        return student

    def add_student(self, name: str, *, now: Optional[datetime] = None) -> Student:
        name = require_non_empty(name, "Name")
        student = self._students.create_next(name=name, created_at=now or now_utc())
        logger.info("Added student %s (%s)", student.student_id, student.name)
        return student

    def rename_student(self, student_id: str, name: str) -> None:
        require_student_id(student_id)
        name = require_non_empty(name, "Name")
        if not self._students.rename(student_id, name=name):
            raise NotFoundError(f"Student {student_id} not found")
        logger.info("Renamed student %s", student_id)

    def delete_student(self, student_id: str) -> None:
        require_student_id(student_id)
        if not self._students.delete_by_id(student_id):
            raise NotFoundError(f"Student {student_id} not found")
        changed = self._attendance.remove_student(student_id)
        logger.info("Deleted student %s (removed from %d records)", student_id, changed)
