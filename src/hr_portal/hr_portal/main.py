from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .attendance.model import WorkHours
from .auth.controller import register as register_auth
from .common.datetime_utils import parse_clock
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .organization.controller import register as register_organization
from .payments.controller import register as register_payments
from .profiles.controller import register as register_profiles
from .routing.controller import register as register_routing

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def _configure_logging(settings, debug: bool) -> None:
    level_name = str(getattr(settings, "LOG_LEVEL", "DEBUG" if debug else "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_users(db_config)
        logger.info("Demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app; pass ``container`` to run on other repositories (tests)."""
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    session_hours = int(getattr(settings, "SESSION_HOURS", 12))
    app.permanent_session_lifetime = timedelta(hours=session_hours)

    _configure_logging(settings, app.config["DEBUG"])

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _bootstrap_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            session_hours=session_hours,
            work_hours=WorkHours(
                start=parse_clock(getattr(settings, "WORK_START", "08:00")),
                end=parse_clock(getattr(settings, "WORK_END", "17:00")),
            ),
            grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", 5)),
        )

    app.extensions["hr_portal"] = container

    # the guard hook must be registered before any view module
    register_routing(app, container)
    register_auth(app, container)
    register_profiles(app, container)
    register_attendance(app, container)
    register_payments(app, container)
    register_organization(app, container)

    return app
