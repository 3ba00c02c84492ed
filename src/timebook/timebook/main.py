from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask
from flask.logging import default_handler

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables

from .container import build_container
from .catalog.controller import register as register_catalog
from .entries.controller import register as register_entries
from .management.controller import register as register_management
from .schedules.controller import register as register_schedules
from .team.controller import register as register_team
from .users.controller import register as register_users

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def configure_logging(app: Flask, level: str) -> None:
    """Route service loggers through Flask's handler.

    app.logger lives under the package logger, so the handler sits on the package logger only.
    """

    package_logger = logging.getLogger(__package__)
    package_logger.setLevel(level)
    if default_handler not in package_logger.handlers:
        package_logger.addHandler(default_handler)
    app.logger.removeHandler(default_handler)
    app.logger.setLevel(level)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    log_level = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    configure_logging(app, log_level)

    app.logger.debug(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
        app.logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if getattr(settings, "AUTO_SEED_DB", False):
        apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
        ensure_demo_users(db_config)
        app.logger.info("Demo seed ready")

    container = build_container(db_config=db_config)

    register_users(app, container)
    register_entries(app, container)
    register_catalog(app, container)
    register_schedules(app, container)
    register_management(app, container)
    register_team(app, container)

    return app
