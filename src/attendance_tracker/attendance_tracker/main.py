from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.enums import StorageBackend
from .database.bootstrap import apply_schema, list_tables, seed_demo_roster
from .students.controller import register as register_students

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        backend = getattr(settings, "STORAGE_BACKEND", StorageBackend.LOCAL.value)
        db_config = getattr(settings, "DB_CONFIG", {})
        container = build_container(
            backend=backend,
            db_config=db_config,
            local_store_path=getattr(settings, "LOCAL_STORE_PATH", None),
        )
        logger.info("settings=%s storage=%s", settings_module, backend)

        if container.conn is not None:
            if getattr(settings, "AUTO_INIT_DB", False):
                apply_schema(container.conn)
                logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))
            if getattr(settings, "AUTO_SEED_DB", False):
                seed_demo_roster(container.conn)

    register_students(app, container)
    register_attendance(app, container)
    register_analytics(app, container)

    return app
