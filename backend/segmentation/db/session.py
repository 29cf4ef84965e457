"""SQLAlchemy engine/session initialization and lifecycle management."""
from __future__ import annotations

from typing import Any, Dict

from flask import Flask
from loguru import logger
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import scoped_session, sessionmaker

from .base import Base


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class Database:
    """Single pooled engine shared by every repository for the process lifetime."""

    def __init__(self) -> None:
        self.engine = None
        self.Session = None  # type: ignore[assignment]

    def init_engine(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 20,
    ) -> None:
        kwargs: Dict[str, Any] = {"echo": echo, "pool_pre_ping": True, "future": True}
        sqlite = make_url(url).get_backend_name() == "sqlite"
        if not sqlite:
            kwargs.update(pool_size=pool_size, max_overflow=max_overflow)
        if self.engine is not None:
            self.dispose()
        self.engine = create_engine(url, **kwargs)
        if sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.Session = scoped_session(
            sessionmaker(bind=self.engine, expire_on_commit=False, autoflush=False, future=True)
        )
        logger.info("database engine initialized for {}", make_url(url).render_as_string(hide_password=True))

    def init_app(self, app: Flask) -> None:
        self.init_engine(
            app.config["DATABASE_URL"],
            echo=app.config.get("SQL_ECHO", False),
            pool_size=app.config.get("POOL_SIZE", 10),
            max_overflow=app.config.get("MAX_OVERFLOW", 20),
        )

        @app.teardown_appcontext
        def remove_session(_: object | None) -> None:
            if self.Session is not None:
                self.Session.remove()

    def create_all(self) -> None:
        """Create missing tables (dev/test setups; production uses migrations)."""
        assert self.engine is not None, "DB engine is not initialized"
        from .models import history, membership, segment, user  # noqa: F401

        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        if self.Session is not None:
            self.Session.remove()
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self.Session = None


db = Database()
