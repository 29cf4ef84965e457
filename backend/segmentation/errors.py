"""Global HTTP error handling and JSON response helpers."""
from __future__ import annotations

from typing import Any

from flask import Flask, jsonify
from loguru import logger
from pydantic import ValidationError

from .exceptions import (
    AlreadyExists,
    InvalidInput,
    NotFound,
    SegmentationError,
    StorageError,
)

_STATUS = (
    (NotFound, 404),
    (AlreadyExists, 409),
    (InvalidInput, 400),
    (StorageError, 500),
)


def status_for(err: SegmentationError) -> int:
    for kind, status in _STATUS:
        if isinstance(err, kind):
            return status
    return 500


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(SegmentationError)
    def segmentation_error(err: SegmentationError):  # type: ignore[override]
        status = status_for(err)
        if status >= 500:
            logger.warning("request failed with {}: {}", err.kind, err.message)
            return jsonify({"error": err.kind, "message": "internal storage error"}), status
        return jsonify({"error": err.kind, "message": err.message}), status

    @app.errorhandler(ValidationError)
    def validation_error(err: ValidationError):  # type: ignore[override]
        details = [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in err.errors()
        ]
        return jsonify({"error": "invalid_input", "message": "invalid request body", "details": details}), 400

    @app.errorhandler(400)
    def bad_request(err: Exception):  # type: ignore[override]
        return jsonify({"error": "bad_request", "message": str(err)}), 400

    @app.errorhandler(404)
    def not_found(err: Exception):  # type: ignore[override]
        return jsonify({"error": "not_found", "message": str(err)}), 404

    @app.errorhandler(405)
    def method_not_allowed(err: Exception):  # type: ignore[override]
        return jsonify({"error": "method_not_allowed", "message": str(err)}), 405

    @app.errorhandler(500)
    def internal(err: Exception):  # type: ignore[override]
        return jsonify({"error": "internal_server_error", "message": "unexpected error"}), 500


def ok(data: Any, status: int = 200):
    return jsonify({"data": data}), status
