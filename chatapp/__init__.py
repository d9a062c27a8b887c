# chatapp/__init__.py
"""
Application factory: config, middleware, blueprints and the Socket.IO server.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional

from flask import Flask, Response, abort, request
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO

from .config import Settings, load_settings
# Alias the SQLAlchemy instance: the chatapp.db submodule would shadow a plain "db" name
from .models.base import db as SA_DB
from .auth import auth_bp, login_manager
from .messages import messages_bp
from .health import health_bp
from .errors import register_error_handlers
from .realtime import Presence, register_socket_handlers

migrate = Migrate()

ROOT_MESSAGE = "Backend is running 🚀"


def _install_middleware(app: Flask, client_url: str) -> None:
    # Order matters: the size guard runs before any view reads the body.
    @app.before_request
    def _reject_oversized_body():
        limit = app.config.get("MAX_CONTENT_LENGTH")
        length = request.content_length
        if limit is not None and length is not None and length > limit:
            abort(413, description="Request body exceeds the %d byte limit." % limit)

    # Cookies come parsed from Werkzeug (request.cookies); Flask-Login reads the session from there.
    CORS(app, origins=[client_url], supports_credentials=True)


def create_app(
    config: Optional[Mapping[str, Any]] = None,
    settings: Optional[Settings] = None,
) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__)
    app.config.update(settings.flask_config())
    if config:
        app.config.update(config)

    client_url = str(app.config["CLIENT_URL"]).rstrip("/")

    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")), logging.INFO))
    app.logger.debug("DB URI: %s", app.config["SQLALCHEMY_DATABASE_URI"])
    app.logger.debug("CORS origin: %s", client_url)

    SA_DB.init_app(app)
    migrate.init_app(app, SA_DB)
    login_manager.init_app(app)

    _install_middleware(app, client_url)

    # Server context: the socket server and presence live on this app only.
    socketio = SocketIO(app, cors_allowed_origins=[client_url])
    app.extensions["presence"] = Presence()
    app.extensions["started_at"] = time.monotonic()
    register_socket_handlers(socketio)

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(messages_bp, url_prefix="/api/messages")
    app.register_blueprint(health_bp, url_prefix="/health")

    @app.get("/")
    def index():
        return Response(ROOT_MESSAGE, mimetype="text/plain")

    register_error_handlers(app)
    return app


__all__ = ["create_app", "ROOT_MESSAGE", "SA_DB", "migrate"]
