from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy.orm import Session

from segmentation import create_app
from segmentation.config import TestingConfig
from segmentation.db.session import Database, db as app_db
from segmentation.services.history_service import HistoryService
from segmentation.services.segment_service import SegmentService
from segmentation.services.segmentation_service import SegmentationService
from segmentation.services.user_service import UserService


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 15, 12, 0, 0))


@pytest.fixture()
def database(tmp_path: Path) -> Iterator[Database]:
    database = Database()
    database.init_engine(f"sqlite:///{tmp_path / 'segmentation.sqlite3'}")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture()
def session(database: Database) -> Session:
    assert database.Session is not None
    return database.Session()


@pytest.fixture()
def catalog(session: Session, clock: FakeClock) -> SegmentService:
    return SegmentService(session, clock)


@pytest.fixture()
def users(session: Session) -> UserService:
    return UserService(session)


@pytest.fixture()
def segmentation(session: Session, clock: FakeClock) -> SegmentationService:
    return SegmentationService(session, clock)


@pytest.fixture()
def history(session: Session) -> HistoryService:
    return HistoryService(session)


@pytest.fixture()
def app(tmp_path: Path) -> Iterator[Flask]:
    config = TestingConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'api.sqlite3'}")
    app = create_app(config)
    with app.app_context():
        app_db.create_all()
    yield app
    app_db.dispose()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
