from __future__ import annotations

import importlib
import logging

import mysql.connector
from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.datetime_utils import now_utc, to_iso
from .common.http import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_TOKEN_TTL_SECONDS
from .database.bootstrap import apply_schema, list_tables

from .accounts.controller import register as register_accounts
from .advances.controller import register as register_advances
from .business.controller import register as register_business
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .payments.controller import register as register_payments
from .payroll.controller import register as register_payroll
from .timesheets.controller import register as register_timesheets

logger = logging.getLogger("personnel_hub")


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger().setLevel(level)


def _register_health(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return "Personnel Hub API is working. Go to /health"

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        database = "Not configured"
        if container.conn is not None:
            try:
                list_tables(container.conn)
                database = "Connected"
            except mysql.connector.Error:
                logger.exception("health check could not reach the database")
                database = "Disconnected"
        return jsonify(
            {
                "status": "OK",
                "message": "Personnel Hub API is running",
                "timestamp": to_iso(now_utc()),
                "database": database,
            }
        )


def create_app(container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    token_secret = getattr(settings, "TOKEN_SECRET", "")
    if not token_secret:
        raise RuntimeError("Missing required configuration: TOKEN_SECRET")

    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(
            db_config=db_config,
            token_secret=token_secret,
            token_ttl_seconds=int(getattr(settings, "TOKEN_TTL_SECONDS", DEFAULT_TOKEN_TTL_SECONDS)),
        )
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(container.conn)
            logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))

    app.extensions["personnel_hub.container"] = container

    register_error_handlers(app)
    _register_health(app, container)
    register_accounts(app, container)
    register_business(app, container)
    register_employees(app, container)
    register_leaves(app, container)
    register_advances(app, container)
    register_timesheets(app, container)
    register_payroll(app, container)
    register_payments(app, container)

    return app
