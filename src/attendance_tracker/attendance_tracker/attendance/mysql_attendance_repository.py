from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date_string, db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT r.record_date, p.student_id
                FROM attendance_records r
                LEFT JOIN attendance_presence p ON p.record_date = r.record_date
                ORDER BY r.record_date
                """
            )
            grouped: dict[str, set[str]] = {}
            for row in fetchall(cur):
                ids = grouped.setdefault(as_date_string(row["record_date"]), set())
                if row.get("student_id"):
                    ids.add(str(row["student_id"]))
            return [AttendanceRecord.of(d, ids) for d, ids in grouped.items()]

    def get_for_date(self, record_date: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT record_date FROM attendance_records WHERE record_date=%s", (record_date,))
            if not cur.fetchone():
                return None
            cur.execute("SELECT student_id FROM attendance_presence WHERE record_date=%s", (record_date,))
            return AttendanceRecord.of(record_date, (str(r["student_id"]) for r in fetchall(cur)))

    def upsert(self, *, record_date: str, present_ids: Iterable[str]) -> AttendanceRecord:
        record = AttendanceRecord.of(record_date, present_ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT IGNORE INTO attendance_records(record_date) VALUES(%s)", (record_date,))
            cur.execute("DELETE FROM attendance_presence WHERE record_date=%s", (record_date,))
            if record.present_ids:
                cur.executemany(
                    "INSERT INTO attendance_presence(record_date, student_id) VALUES(%s,%s)",
                    [(record_date, sid) for sid in sorted(record.present_ids)],
                )
        return record

    def remove_student(self, student_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_presence WHERE student_id=%s", (student_id,))
            return int(cur.rowcount)
