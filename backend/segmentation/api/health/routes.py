"""Health check endpoints."""
from __future__ import annotations

from flask import Blueprint
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ...db.session import db
from ...errors import ok


bp = Blueprint("health", __name__)


@bp.get("/")
def alive():
    return ok({"status": "ok"})


@bp.get("/db")
def database_status():
    assert db.Session is not None, "DB session is not initialized"
    session = db.Session()
    try:
        session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("database health check failed: {}", exc)
        return ok({"database": "unavailable"}, 503)
    return ok({"database": "ok"})
