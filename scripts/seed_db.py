"""Seed the demo roster into whichever store the settings select."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.common.datetime_utils import now_utc
from src.attendance_tracker.attendance_tracker.container import build_container
from src.attendance_tracker.attendance_tracker.database.bootstrap import DEMO_ROSTER, seed_demo_roster


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend=settings.STORAGE_BACKEND,
        db_config=dict(settings.DB_CONFIG),
        local_store_path=settings.LOCAL_STORE_PATH,
    )

    if container.conn is not None:
        added = seed_demo_roster(container.conn)
    else:
        existing = {s.student_id for s in container.students_repo.list_all()}
        added = 0
        for s in DEMO_ROSTER:
            if s.student_id not in existing:
                container.students_repo.create(student_id=s.student_id, name=s.name, created_at=now_utc())
                added += 1

    print(f"OK: Seeded {added} students ({settings.STORAGE_BACKEND})")


if __name__ == "__main__":
    main()
