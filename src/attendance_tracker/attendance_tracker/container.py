from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .analytics.service import AnalyticsService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.enums import StorageBackend
from .database.connection import DatabaseConnection, DBConfig
from .storage.local_store import LocalAttendanceRepository, LocalStore, LocalStudentRepository
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import RosterService


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    roster_service: RosterService
    attendance_service: AttendanceService
    analytics_service: AnalyticsService

    conn: Optional[DatabaseConnection] = None


def build_services(
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    *,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        roster_service=RosterService(students_repo, attendance_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo),
        analytics_service=AnalyticsService(students_repo, attendance_repo),
        conn=conn,
    )


def build_container(*, backend: str, db_config: Optional[dict] = None, local_store_path: Optional[str | Path] = None) -> Container:
    backend = StorageBackend(backend)

    if backend is StorageBackend.LOCAL:
        store = LocalStore(local_store_path or "data/attendance.json")
        return build_services(LocalStudentRepository(store), LocalAttendanceRepository(store))

    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
    return build_services(MySQLStudentRepository(conn), MySQLAttendanceRepository(conn), conn=conn)
