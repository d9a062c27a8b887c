"""Process configuration.

Environment variables are read once at bootstrap, after ``.env`` has been
loaded, and stay fixed for the life of the process.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_PORT = 5001
DEFAULT_CLIENT_URL = "http://localhost:5173"
MAX_JSON_BYTES = 4 * 1024 * 1024  # 4 MB, large enough for inline images


def _default_db_uri() -> str:
    return "sqlite:///" + os.path.abspath("chat.db")


def _parse_port(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"PORT out of range: {port}")
    return port


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    client_url: str = DEFAULT_CLIENT_URL
    database_url: str = ""
    secret_key: str = "dev"
    log_level: str = "INFO"
    auto_create_tables: bool = True

    def flask_config(self) -> dict:
        return {
            "SECRET_KEY": self.secret_key,
            "SQLALCHEMY_DATABASE_URI": self.database_url or _default_db_uri(),
            "SQLALCHEMY_TRACK_MODIFICATIONS": False,
            "MAX_CONTENT_LENGTH": MAX_JSON_BYTES,
            "SESSION_COOKIE_SAMESITE": "Lax",
            "SESSION_COOKIE_HTTPONLY": True,
            "CLIENT_URL": self.client_url,
            "PORT": self.port,
            "LOG_LEVEL": self.log_level,
            "AUTO_CREATE_TABLES": self.auto_create_tables,
        }


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from ``environ`` (defaults to ``os.environ``).

    ``.env`` is only consulted when reading the real process environment, and
    never overrides variables that are already set.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    return Settings(
        port=_parse_port(environ.get("PORT")),
        client_url=environ.get("CLIENT_URL") or DEFAULT_CLIENT_URL,
        database_url=environ.get("DATABASE_URL", ""),
        secret_key=environ.get("SECRET_KEY", "dev"),
        log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
        auto_create_tables=environ.get("AUTO_CREATE_TABLES", "1") == "1",
    )
