"""Translation of SQLAlchemy failures into core storage errors."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Type

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...exceptions import ReadError, StorageError, WriteError


@contextmanager
def _translate(session: Session, error: Type[StorageError], action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("storage failure while {}: {}", action, exc)
        raise error(f"error while {action}") from exc


def reading(session: Session, action: str):
    return _translate(session, ReadError, action)


def writing(session: Session, action: str):
    return _translate(session, WriteError, action)
