from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_date(self, record_date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, *, record_date: str, present_ids: Iterable[str]) -> AttendanceRecord:
        """Create or replace the record for `record_date`."""

        raise NotImplementedError

    def remove_student(self, student_id: str) -> int:
        """Strip `student_id` from every record; returns how many records changed."""

        raise NotImplementedError
