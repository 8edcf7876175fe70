from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .audit.controller import register as register_audit
from .container import build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .database.demo import seed_demo_data
from .payments.controller import register as register_payments
from .reports.controller import register as register_reports
from .staff.controller import register as register_staff
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    backend = getattr(settings, "STORAGE_BACKEND", "mysql")
    db_config = getattr(settings, "DB_CONFIG", {})
    database_url = getattr(settings, "DATABASE_URL", "")

    if backend == "mysql":
        target = DBConfig.from_url(database_url) if database_url else DBConfig.from_dict(db_config)
        # Helpful startup info to avoid "connected but no tables" confusion.
        logger.info("settings=%s db=%s", settings_module, target.describe())
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(target, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(target)))
    else:
        logger.info("settings=%s storage=%s", settings_module, backend)

    container = build_container(backend=backend, db_config=db_config, database_url=database_url)
    app.extensions["payroll_ledger"] = container

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        seed_demo_data(container)

    @app.route("/healthz", endpoint="healthz")
    def healthz():
        return jsonify({"success": True, "backend": backend})

    register_users(app, container)
    register_staff(app, container)
    register_payments(app, container)
    register_audit(app, container)
    register_dashboard(app, container)
    register_reports(app, container)

    return app
