"""Segment catalog service encapsulating business rules."""
from __future__ import annotations

from typing import List

from loguru import logger
from sqlalchemy.orm import Session

from ..db.repositories.history_repo import HistoryRepository
from ..db.repositories.membership_repo import MembershipRepository
from ..db.repositories.segment_repo import SegmentRepository
from ..domain.segment import Segment
from ..exceptions import AlreadyExists, InvalidInput, SegmentNotFound
from ..utils.timeutil import Clock, utcnow


class SegmentService:
    def __init__(self, session: Session, clock: Clock = utcnow) -> None:
        self.repo = SegmentRepository(session)
        self.memberships = MembershipRepository(session, clock)
        self.history = HistoryRepository(session, clock)

    def list_segments(self) -> List[Segment]:
        return self.repo.list()

    def get_by_slug(self, slug: str) -> Segment:
        segment = self.repo.get_by_slug(slug)
        if segment is None:
            raise SegmentNotFound(slug)
        return segment

    def create_segment(self, slug: str, description: str = "") -> str:
        if not slug or not slug.strip():
            raise InvalidInput("slug must not be empty")
        if slug != slug.strip():
            raise InvalidInput(f"slug {slug!r} must not start or end with whitespace")
        # The pre-check only improves the message; the unique index decides.
        if self.repo.exists(slug):
            raise AlreadyExists(f"segment {slug!r} already exists")
        created = self.repo.create(slug, description)
        logger.info("segment {!r} created with id {}", created.slug, created.id)
        return created.slug

    def update_segment(self, slug: str, description: str) -> Segment:
        updated = self.repo.update(slug, description)
        if updated is None:
            raise SegmentNotFound(slug)
        logger.info("segment {!r} description updated", slug)
        return updated

    def delete_segment(self, slug: str) -> Segment:
        """Delete a segment and every membership that references it.

        Each removed membership gets a REMOVING history record so the audit
        trail stays complete.
        """
        self.get_by_slug(slug)
        for user_id in self.memberships.remove_slug(slug):
            self.history.record_remove(user_id, slug)
        deleted = self.repo.delete(slug)
        if deleted is None:
            raise SegmentNotFound(slug)
        logger.info("segment {!r} deleted", slug)
        return deleted
