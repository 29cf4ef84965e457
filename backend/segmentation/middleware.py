"""Loguru setup and per-request logging."""
from __future__ import annotations

import sys
import time
import uuid

from flask import Flask, Response, g, request
from loguru import logger

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> | {extra}"
)


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=_FORMAT, backtrace=False, diagnose=False)


def register_request_logging(app: Flask) -> None:
    @app.before_request
    def _start() -> None:
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        g.started_at = time.perf_counter()
        g.log = logger.bind(method=request.method, path=request.full_path.rstrip("?"), request_id=g.request_id)
        g.log.info("request started")

    @app.after_request
    def _finish(response: Response) -> Response:
        log = g.get("log", logger)
        started = g.get("started_at")
        duration = time.perf_counter() - started if started is not None else 0.0
        response.headers["X-Request-ID"] = g.get("request_id", "")
        if response.status_code >= 500:
            log.bind(status=response.status_code).warning("request failed with duration {:.6f} seconds", duration)
        else:
            log.bind(status=response.status_code).info("request finished with duration {:.6f} seconds", duration)
        return response
