"""JSON error envelopes for the playground HTTP API.

Pipeline failures are not HTTP errors: they are returned as results with
``success: false``. Only malformed requests end up here, each rendered as
``{"status": "ERROR", "message": ...}`` plus optional details.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException


@dataclass
class APIError(Exception):
    """Rejected request with the HTTP status to answer it with."""

    status: int
    message: str
    extra: Dict[str, Any] | None = None

    @classmethod
    def json_body_required(cls) -> "APIError":
        return cls(400, "JSON body required")

    @classmethod
    def invalid_request(cls, err: ValidationError) -> "APIError":
        return cls(
            422,
            "validation error",
            {"details": err.errors(include_url=False, include_context=False)},
        )

    def to_response(self):
        payload: Dict[str, Any] = {"status": "ERROR", "message": self.message}
        if self.extra:
            payload.update(self.extra)
        return jsonify(payload), self.status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(APIError)
    def _handle_api_error(err: APIError):  # type: ignore[override]
        return err.to_response()

    @app.errorhandler(ValidationError)
    def _handle_validation(err: ValidationError):  # type: ignore[override]
        return APIError.invalid_request(err).to_response()

    @app.errorhandler(HTTPException)
    def _handle_http(err: HTTPException):  # type: ignore[override]
        # Unknown routes and methods answer in the same envelope.
        return APIError(err.code or 500, err.description or err.name).to_response()


__all__ = ["APIError", "register_error_handlers"]
