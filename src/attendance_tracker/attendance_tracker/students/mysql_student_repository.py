from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from mysql.connector import errors

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student, next_student_id
from .repository import StudentRepository

# Concurrent adds can race for the same id; the primary key rejects the loser.
CREATE_NEXT_ATTEMPTS = 5


def _to_student(r: dict) -> Student:
    return Student(student_id=str(r["student_id"]), name=str(r["name"]), created_at=r.get("created_at"))


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Ids are 'S' + digits: order by length first so S100 sorts after S99.
            cur.execute(
                """
                SELECT student_id, name, created_at
                FROM students
                ORDER BY CHAR_LENGTH(student_id), student_id
                """
            )
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT student_id, name, created_at FROM students WHERE student_id=%s", (student_id,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def create(self, *, student_id: str, name: str, created_at: datetime) -> Student:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO students(student_id, name, created_at) VALUES(%s,%s,%s)",
                    (student_id, name, created_at),
                )
        except errors.IntegrityError as exc:
            raise ConflictError(f"Student {student_id} already exists") from exc
        return Student(student_id=student_id, name=name, created_at=created_at)

    def create_next(self, *, name: str, created_at: datetime) -> Student:
        attempts_left = CREATE_NEXT_ATTEMPTS
        while True:
            try:
                return self.create(student_id=next_student_id(self.list_all()), name=name, created_at=created_at)
            except ConflictError:
                attempts_left -= 1
                if not attempts_left:
                    raise

    def rename(self, student_id: str, *, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 FROM students WHERE student_id=%s", (student_id,))
            if not fetchone(cur):
                return False
            cur.execute("UPDATE students SET name=%s WHERE student_id=%s", (name, student_id))
            return True

    def delete_by_id(self, student_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (student_id,))
            return cur.rowcount > 0
