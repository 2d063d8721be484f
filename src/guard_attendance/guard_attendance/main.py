from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .assignments.controller import register as register_assignments
from .attendance.controller import register as register_attendance
from .common.logging_setup import setup_logging
from .container import Container, build_container, build_memory_container
from .core.exceptions import (
    ConflictError,
    DomainError,
    DuplicateSlotError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from .database.bootstrap import apply_schema, list_tables
from .slots.controller import register as register_slots
from .temporary_slots.controller import register as register_temporary_slots

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
    (DuplicateSlotError, 409),
    (InvalidStateError, 422),
)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
        payload = {"success": False, "error": type(e).__name__, "message": str(e)}
        if isinstance(e, ConflictError) and e.conflicting_slot_id is not None:
            payload["conflicting_slot_id"] = e.conflicting_slot_id
        return jsonify(payload), status


def _build_container_from_settings(settings) -> Container:
    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower()
    if backend == "memory":
        return build_memory_container()

    db_config = getattr(settings, "DB_CONFIG")
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(getattr(settings, "SCHEMA_PATH", "database/schema.sql"))
        apply_schema(db_config, schema_path=schema_path)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    logger.info(
        "Using MySQL %s@%s:%s/%s",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )
    return build_container(db_config=db_config)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(getattr(settings, "LOG_LEVEL", None), debug=app.config["DEBUG"])
    logger.info("Starting guard-attendance (settings=%s)", settings_module)

    if container is None:
        container = _build_container_from_settings(settings)
    app.extensions["guard_attendance"] = container

    _register_error_handlers(app)
    register_slots(app, container)
    register_assignments(app, container)
    register_attendance(app, container)
    register_temporary_slots(app, container)

    return app
