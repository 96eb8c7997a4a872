from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import DomainError, InfrastructureError
from .database.bootstrap import apply_schema, ensure_admin_user
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(InfrastructureError)
    def handle_infrastructure_error(e: InfrastructureError):
        logger.error("%s: %s", e.kind, e.detail or e.__cause__, exc_info=e)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error")
        return jsonify(InfrastructureError().to_dict()), 500


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            admin_email = getattr(settings, "BOOTSTRAP_ADMIN_EMAIL", "")
            if admin_email:
                ensure_admin_user(db_config, user_id=admin_email, full_name=settings.BOOTSTRAP_ADMIN_NAME)
        container = build_container(settings=settings)

    logger.info("Time clock starting (settings=%s, backend=%s)", settings_module, getattr(settings, "EVENT_LOG_BACKEND", "-"))

    _register_error_handlers(app)
    register_attendance(app, container)
    register_reports(app, container)

    return app
