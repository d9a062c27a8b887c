"""JSON error responses for the API."""
from __future__ import annotations

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from .schemas import first_error


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return jsonify(error=e.description), e.code

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return jsonify(error=first_error(e)), 400
