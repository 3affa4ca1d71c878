"""Example: use the service layer and the analytics functions without Flask."""

import importlib
from datetime import date, datetime, timezone

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend=settings.STORAGE_BACKEND,
        db_config=settings.DB_CONFIG,
        local_store_path=settings.LOCAL_STORE_PATH,
    )
    now = datetime.now(timezone.utc)

    report = container.analytics_service.build_dashboard(now=now)
    for stat in report.stats:
        print(f"{stat.name}: {stat.value}")

    print()
    print(container.analytics_service.daily_summary(date.today()))


if __name__ == "__main__":
    main()
