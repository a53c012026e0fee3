from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path
from types import ModuleType

from flask import Flask, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

from .auth.controller import register as register_auth
from .container import Container, build_container
from .core.constants import DEFAULT_MAX_PHOTO_BYTES, DEFAULT_SESSION_HOURS
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .logging_setup import setup_logging
from .members.controller import register as register_members
from .memberships.controller import register as register_memberships
from .scan.controller import register as register_scan
from .settings import load_settings

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]


def create_app(*, settings: ModuleType | None = None, container: Container | None = None) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__, template_folder=str(REPO_ROOT / "templates"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_PHOTO_BYTES", DEFAULT_MAX_PHOTO_BYTES))
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(hours=int(getattr(settings, "SESSION_HOURS", DEFAULT_SESSION_HOURS)))
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SESSION_COOKIE_SECURE", False))

    setup_logging(level=getattr(settings, "LOG_LEVEL", "INFO"), log_dir=getattr(settings, "LOG_DIR", None))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings.__name__, DBConfig.from_dict(db_config).describe())
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(settings)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(_e):
        return jsonify({"ok": False, "message": "Upload too large."}), 413

    register_auth(app, container)
    register_scan(app, container)
    register_memberships(app, container)
    register_members(app, container)

    return app
