from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pytest

from src.attendance_tracker.attendance_tracker.core.exceptions import ConflictError
from src.attendance_tracker.attendance_tracker.storage.local_store import (
    LocalAttendanceRepository,
    LocalStore,
    LocalStudentRepository,
)
from src.attendance_tracker.attendance_tracker.students.service import RosterService


def test_missing_file_loads_empty(tmp_path):
    store = LocalStore(tmp_path / "missing.json")

    snapshot = store.load()

    assert snapshot.students == []
    assert snapshot.records == []


def test_students_persist_and_sort_by_number(tmp_path):
    path = tmp_path / "data" / "attendance.json"
    repo = LocalStudentRepository(LocalStore(path))
    created = datetime(2024, 1, 1, 8, 0)

    repo.create(student_id="S10", name="Ten", created_at=created)
    repo.create(student_id="S02", name="Two", created_at=created)
    assert repo.rename("S02", name="Second")
    assert not repo.rename("S99", name="Nobody")

    reopened = LocalStudentRepository(LocalStore(path))
    assert [(s.student_id, s.name) for s in reopened.list_all()] == [("S02", "Second"), ("S10", "Ten")]
    assert reopened.get_by_id("S10").created_at == created
    assert reopened.delete_by_id("S10")
    assert not reopened.delete_by_id("S10")


def test_attendance_upsert_and_remove_student(tmp_path):
    store = LocalStore(tmp_path / "attendance.json")
    repo = LocalAttendanceRepository(store)

    repo.upsert(record_date="2024-01-02", present_ids=["S01", "S02"])
    repo.upsert(record_date="2024-01-01", present_ids=["S01"])
    repo.upsert(record_date="2024-01-02", present_ids=["S02", "S03"])

    assert [r.record_date for r in repo.list_all()] == ["2024-01-01", "2024-01-02"]
    assert repo.get_for_date("2024-01-02").present_ids == frozenset({"S02", "S03"})

    assert repo.remove_student("S02") == 1
    assert repo.get_for_date("2024-01-02").present_ids == frozenset({"S03"})
    assert repo.get_for_date("2024-01-09") is None


def test_create_rejects_existing_id(tmp_path):
    repo = LocalStudentRepository(LocalStore(tmp_path / "attendance.json"))
    repo.create(student_id="S01", name="One", created_at=datetime(2024, 1, 1))

    with pytest.raises(ConflictError):
        repo.create(student_id="S01", name="Other", created_at=datetime(2024, 1, 1))
    assert [s.name for s in repo.list_all()] == ["One"]


def test_concurrent_adds_get_distinct_ids(tmp_path):
    store = LocalStore(tmp_path / "attendance.json")
    roster = RosterService(LocalStudentRepository(store), LocalAttendanceRepository(store))

    with ThreadPoolExecutor(max_workers=8) as pool:
        added = list(pool.map(lambda i: roster.add_student(f"Student {i}"), range(8)))

    ids = sorted(s.student_id for s in added)
    assert ids == [f"S{n:02d}" for n in range(1, 9)]
    assert sorted(s.student_id for s in roster.list_students()) == ids
