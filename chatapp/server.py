"""
Thin runner: builds the app, connects the database, then serves HTTP and
Socket.IO on the configured port.
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from . import create_app
from .config import load_settings
from .db import connect_db

HOST = "0.0.0.0"


def build_parser() -> argparse.ArgumentParser:
    # All settings come from the environment; the process takes no arguments.
    return argparse.ArgumentParser(
        prog="chatapp-server",
        description="Chat backend (configure with PORT, CLIENT_URL, DATABASE_URL, SECRET_KEY)",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    build_parser().parse_args(argv)
    settings = load_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    app = create_app(settings=settings)
    socketio = app.extensions["socketio"]

    connect_db(app)
    # socketio.run blocks while serving, so this is logged just before the bind
    app.logger.info("Server is running on PORT: %s", settings.port)
    socketio.run(app, host=HOST, port=settings.port, allow_unsafe_werkzeug=True)


if __name__ == "__main__":
    main()
