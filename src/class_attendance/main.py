from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .courses.controller import register as register_courses
from .dashboard.controller import register as register_dashboard
from .rooms.controller import register as register_rooms
from .schedules.controller import register as register_schedules
from .sections.controller import register as register_sections
from .sessions.controller import register as register_sessions
from .students.controller import register as register_students

logger = logging.getLogger(__name__)


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger("class_attendance").setLevel(level)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Passing a ready `container` skips the database bootstrap; tests use this
    to run the routes against in-memory repositories.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = dict(getattr(settings, "DB_CONFIG"))
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["BASE_URL"] = getattr(settings, "BASE_URL", "http://localhost:5000")

    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            base_url=app.config["BASE_URL"],
            ttl_minutes=int(getattr(settings, "SESSION_TTL_MINUTES", 60)),
            late_after_minutes=int(getattr(settings, "LATE_AFTER_MINUTES", 15)),
        )

    app.extensions["class_attendance"] = container

    register_dashboard(app, container)
    register_courses(app, container)
    register_rooms(app, container)
    register_sections(app, container)
    register_schedules(app, container)
    register_students(app, container)
    register_sessions(app, container)
    register_attendance(app, container)

    return app
