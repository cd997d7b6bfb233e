from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .common.datetime_utils import parse_iso_date
from .common.logging_config import configure_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .invites.controller import register as register_invites
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"

_SETTING_NAMES = ("CLASS_TIMEZONE", "INVITE_TTL_HOURS", "CHECKIN_RADIUS_METERS")


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    for name in _SETTING_NAMES:
        if hasattr(settings, name):
            app.config[name] = getattr(settings, name)

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        service_settings = {n: app.config[n] for n in _SETTING_NAMES if n in app.config}
        container = build_container(db_config=db_config, settings=service_settings)

    app.extensions["classroom_attendance"] = container

    register_users(app, container)
    register_classes(app, container)
    register_attendance(app, container)
    register_invites(app, container)

    @app.cli.command("sweep-absences")
    @click.option("--date", "day", default=None, help="Session date to sweep (YYYY-MM-DD); defaults to today per class time zone.")
    def sweep_absences_command(day: Optional[str]):
        """Mark every unrecorded slot of today's sessions as absent."""
        summary = container.attendance_service.sweep_absences(today=parse_iso_date(day) if day else None)
        click.echo(f"Swept {summary.classes_scanned} class(es); marked {summary.records_marked} record(s) absent.")

    @app.cli.command("init-db")
    def init_db_command():
        """Apply database/schema.sql (idempotent)."""
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        click.echo(f"OK: schema applied (tables={len(list_tables(db_config))})")

    return app
