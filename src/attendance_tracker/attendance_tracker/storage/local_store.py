"""JSON-file store for running without a database server.

The whole document is read and rewritten on every change, like the browser
key-value store it replaces. Fine for one class worth of data.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.exceptions import ConflictError
from ..students.model import Student, next_student_id

logger = logging.getLogger(__name__)


def _id_sort_key(student: Student):
    digits = student.student_id[1:]
    return (len(student.student_id), int(digits) if digits.isdigit() else 0, student.student_id)


@dataclass
class StoreSnapshot:
    students: List[Student] = field(default_factory=list)
    records: List[AttendanceRecord] = field(default_factory=list)


class LocalStore:
    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.RLock()

    @property
    def lock(self):
        return self._lock

    def load(self) -> StoreSnapshot:
        with self._lock:
            if not self._path.exists():
                return StoreSnapshot()
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        return StoreSnapshot(
            students=[Student.from_dict(s) for s in data.get("students", [])],
            records=[AttendanceRecord.from_dict(r) for r in data.get("attendance", [])],
        )

    def save(self, snapshot: StoreSnapshot) -> None:
        data = {
            "students": [s.to_dict() for s in snapshot.students],
            "attendance": [r.to_dict() for r in snapshot.records],
        }
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(self._path)
        logger.debug("Saved local store to %s", self._path)


class LocalStudentRepository:
    def __init__(self, store: LocalStore):
        self._store = store

    def list_all(self) -> Sequence[Student]:
        return sorted(self._store.load().students, key=_id_sort_key)

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return next((s for s in self._store.load().students if s.student_id == student_id), None)

    def create(self, *, student_id: str, name: str, created_at: datetime) -> Student:
        student = Student(student_id=student_id, name=name, created_at=created_at)
        with self._store.lock:
            snapshot = self._store.load()
            if any(s.student_id == student_id for s in snapshot.students):
                raise ConflictError(f"Student {student_id} already exists")
            snapshot.students.append(student)
            self._store.save(snapshot)
        return student

    def create_next(self, *, name: str, created_at: datetime) -> Student:
        with self._store.lock:
            snapshot = self._store.load()
            student = Student(student_id=next_student_id(snapshot.students), name=name, created_at=created_at)
            snapshot.students.append(student)
            self._store.save(snapshot)
        return student

    def rename(self, student_id: str, *, name: str) -> bool:
        with self._store.lock:
            snapshot = self._store.load()
            for i, s in enumerate(snapshot.students):
                if s.student_id == student_id:
                    snapshot.students[i] = Student(student_id=s.student_id, name=name, created_at=s.created_at)
                    self._store.save(snapshot)
                    return True
        return False

    def delete_by_id(self, student_id: str) -> bool:
        with self._store.lock:
            snapshot = self._store.load()
            kept = [s for s in snapshot.students if s.student_id != student_id]
            if len(kept) == len(snapshot.students):
                return False
            snapshot.students = kept
            self._store.save(snapshot)
        return True


class LocalAttendanceRepository:
    def __init__(self, store: LocalStore):
        self._store = store

    def list_all(self) -> Sequence[AttendanceRecord]:
        return sorted(self._store.load().records, key=lambda r: r.record_date)

    def get_for_date(self, record_date: str) -> Optional[AttendanceRecord]:
        return next((r for r in self._store.load().records if r.record_date == record_date), None)

    def upsert(self, *, record_date: str, present_ids: Iterable[str]) -> AttendanceRecord:
        record = AttendanceRecord.of(record_date, present_ids)
        with self._store.lock:
            snapshot = self._store.load()
            snapshot.records = [r for r in snapshot.records if r.record_date != record_date]
            snapshot.records.append(record)
            self._store.save(snapshot)
        return record

    def remove_student(self, student_id: str) -> int:
        changed = 0
        with self._store.lock:
            snapshot = self._store.load()
            updated = []
            for r in snapshot.records:
                if r.is_present(student_id):
                    r = AttendanceRecord(record_date=r.record_date, present_ids=r.present_ids - {student_id})
                    changed += 1
                updated.append(r)
            snapshot.records = updated
            if changed:
                self._store.save(snapshot)
        return changed
