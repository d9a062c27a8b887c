"""Database connection lifecycle."""
from __future__ import annotations

import sqlalchemy as sa
from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from .models import db


def ping() -> bool:
    """Round-trip ``SELECT 1``; must run inside an app context."""
    try:
        db.session.execute(sa.text("SELECT 1"))
        return True
    except SQLAlchemyError:
        db.session.rollback()
        return False


def connect_db(app: Flask) -> bool:
    """Open a first connection and, in dev mode, create missing tables.

    Failures are logged, not raised: the server keeps running and handlers
    that touch the database fail on their own until it is reachable.
    """
    with app.app_context():
        try:
            with db.engine.connect() as conn:
                conn.execute(sa.text("SELECT 1"))
            if app.config.get("AUTO_CREATE_TABLES", True):
                db.create_all()
        except SQLAlchemyError as e:
            app.logger.error("Database connection error: %s", e)
            return False
        app.logger.info("Database connected: %s", db.engine.dialect.name)
        return True
