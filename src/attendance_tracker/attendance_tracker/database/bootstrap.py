from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from ..students.model import Student
from .connection import DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parents[4] / "database" / "schema.sql"

DEMO_ROSTER = (
    Student("S01", "Amaan Shaik"),
    Student("S02", "Veronika Ahongshangbam"),
    Student("S03", "Diana Prince"),
    Student("S04", "Arjun Reddy"),
    Student("S05", "Danish R"),
    Student("S06", "Salman Khan"),
    Student("S07", "Riya Singh"),
)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # schema.sql holds plain DDL without ';' inside literals.
    for stmt in sql.split(";"):
        stmt = stmt.strip()
        if stmt:
            yield stmt


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = DEFAULT_SCHEMA_PATH) -> None:
    ensure_database_exists(conn_factory)
    sql = Path(schema_path).read_text(encoding="utf-8")
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
    logger.info("Schema applied to %s", conn_factory.config.database)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]


def seed_demo_roster(conn_factory: DatabaseConnection) -> int:
    """Insert the demo students that are missing; returns how many were added."""
    added = 0
    with db_cursor(conn_factory) as (_, cur):
        for s in DEMO_ROSTER:
            cur.execute("INSERT IGNORE INTO students(student_id, name, created_at) VALUES(%s, %s, NOW())", (s.student_id, s.name))
            added += cur.rowcount
    logger.info("Seeded %d demo students", added)
    return added
