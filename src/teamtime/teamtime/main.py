from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .breaks.controller import register as register_breaks
from .common.web import CONTAINER_EXTENSION, register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_ANNUAL_LEAVE_ALLOWANCE, DEFAULT_GEOLOCATION_TIMEOUT_SECONDS
from .database.bootstrap import apply_schema, apply_sql_file, ensure_demo_users, list_tables
from .database.connection import DBConfig
from .leaves.controller import register as register_leaves
from .notifications.controller import register as register_notifications
from .settings.controller import register as register_settings
from .settings.service import default_settings
from .tasks.controller import register as register_tasks
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _prepare_database(settings, db_config: dict) -> None:
    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if getattr(settings, "AUTO_SEED_DB", False):
        ensure_demo_users(db_config)
        apply_sql_file(db_config, path=DATABASE_DIR / "seed.sql")
        logger.info("Demo seed ready")


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Pass ``container`` to run on other repositories than MySQL (tests); the
    database bootstrap is skipped then.
    """
    load_dotenv(override=False)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.permanent_session_lifetime = timedelta(days=7)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["GEOLOCATION_TIMEOUT_SECONDS"] = int(
        getattr(settings, "GEOLOCATION_TIMEOUT_SECONDS", DEFAULT_GEOLOCATION_TIMEOUT_SECONDS)
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.debug("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())
        _prepare_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            fallback_settings=default_settings(getattr(settings, "DEFAULT_OFFICE", None)),
            annual_leave_allowance=getattr(settings, "ANNUAL_LEAVE_ALLOWANCE", DEFAULT_ANNUAL_LEAVE_ALLOWANCE),
        )

    app.extensions[CONTAINER_EXTENSION] = container
    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_breaks(app, container)
    register_leaves(app, container)
    register_tasks(app, container)
    register_notifications(app, container)
    register_announcements(app, container)
    register_settings(app, container)

    return app
