import time

from flask import Blueprint, current_app, jsonify

from .db import ping

health_bp = Blueprint("health_bp", __name__)


@health_bp.get("")
def health():
    up = ping()
    started = current_app.extensions.get("started_at", time.monotonic())
    body = {
        "status": "ok" if up else "degraded",
        "database": "up" if up else "down",
        "uptime": round(time.monotonic() - started, 3),
    }
    return jsonify(body), 200 if up else 503
