"""SQLAlchemy-backed Segment repository returning dataclasses."""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .base import reading, writing
from ..models.segment import SegmentModel
from ...domain.segment import Segment
from ...exceptions import AlreadyExists, WriteError


def _to_dc(m: SegmentModel) -> Segment:
    return Segment(id=m.id, slug=m.slug, description=m.description or "")


class SegmentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _get_model(self, slug: str) -> Optional[SegmentModel]:
        stmt = select(SegmentModel).where(SegmentModel.slug == slug).limit(1)
        return self.session.scalars(stmt).first()

    def list(self) -> List[Segment]:
        with reading(self.session, "listing segments"):
            stmt = select(SegmentModel).order_by(SegmentModel.id)
            return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def get_by_slug(self, slug: str) -> Optional[Segment]:
        with reading(self.session, f"reading segment {slug!r}"):
            m = self._get_model(slug)
        return _to_dc(m) if m else None

    def exists(self, slug: str) -> bool:
        return self.get_by_slug(slug) is not None

    def create(self, slug: str, description: str = "") -> Segment:
        """Insert a segment; the unique index on ``slug`` rejects duplicates."""
        m = SegmentModel(slug=slug, description=description or "")
        with writing(self.session, f"creating segment {slug!r}"):
            self.session.add(m)
            try:
                self.session.commit()
            except IntegrityError as exc:
                self.session.rollback()
                if self.get_by_slug(slug) is not None:
                    raise AlreadyExists(f"segment {slug!r} already exists") from exc
                raise WriteError(f"error while creating segment {slug!r}") from exc
            self.session.refresh(m)
        return _to_dc(m)

    def update(self, slug: str, description: str) -> Optional[Segment]:
        with reading(self.session, f"reading segment {slug!r}"):
            m = self._get_model(slug)
        if not m:
            return None
        with writing(self.session, f"updating segment {slug!r}"):
            m.description = description or ""
            self.session.commit()
            self.session.refresh(m)
        return _to_dc(m)

    def delete(self, slug: str) -> Optional[Segment]:
        with reading(self.session, f"reading segment {slug!r}"):
            m = self._get_model(slug)
        if not m:
            return None
        deleted = _to_dc(m)
        with writing(self.session, f"deleting segment {slug!r}"):
            self.session.delete(m)
            self.session.commit()
        return deleted
