"""Membership lifecycle policy: idempotent add/remove with audit, active queries.

Known limitations that are kept on purpose:

* ``change_segments_of_user`` is not atomic. It fails fast and whatever was
  applied before the failing step stays applied.
* History is written after the membership change it describes. If the history
  write fails the membership change is not rolled back and the error is
  surfaced to the caller.
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence, Tuple

from loguru import logger
from sqlalchemy.orm import Session

from ..db.repositories.history_repo import HistoryRepository
from ..db.repositories.membership_repo import MembershipRepository
from ..db.repositories.segment_repo import SegmentRepository
from ..db.repositories.user_repo import UserRepository
from ..domain.membership import ActiveSegments, ChangeResult
from ..exceptions import SegmentNotFound, UserNotFound
from ..utils.timeutil import Clock, utcnow
from .user_service import UserService

Addition = Tuple[str, Optional[datetime]]


class SegmentationService:
    def __init__(self, session: Session, clock: Clock = utcnow) -> None:
        self.users = UserRepository(session)
        self.user_service = UserService(session)
        self.segments = SegmentRepository(session)
        self.memberships = MembershipRepository(session, clock)
        self.history = HistoryRepository(session, clock)

    def _require_user(self, user_id: int) -> None:
        if not self.users.exists(user_id):
            raise UserNotFound(user_id)

    def create_user(self, name: str) -> int:
        return self.user_service.create_user(name).id

    def add_segment_to_user(self, user_id: int, slug: str, deadline: Optional[datetime] = None) -> bool:
        """Add ``slug`` to the user; returns ``False`` if the pair already existed."""
        self._require_user(user_id)
        if not self.segments.exists(slug):
            raise SegmentNotFound(slug)

        if self.memberships.exists(user_id, slug):
            logger.debug("user {} already in {!r}, nothing to add", user_id, slug)
            return False

        if not self.memberships.add(user_id, slug, deadline):
            logger.debug("concurrent add of {!r} to user {} detected, nothing to add", slug, user_id)
            return False

        self.history.record_add(user_id, slug)
        logger.info("added {!r} to user {} (deadline={})", slug, user_id, deadline)
        return True

    def remove_segment_from_user(self, user_id: int, slug: str) -> bool:
        """Remove ``slug`` from the user; returns ``False`` if there was nothing to remove."""
        self._require_user(user_id)

        if not self.memberships.exists(user_id, slug):
            logger.debug("user {} not in {!r}, nothing to remove", user_id, slug)
            return False

        if not self.memberships.remove(user_id, slug):
            logger.debug("concurrent removal of {!r} from user {} detected", slug, user_id)
            return False

        self.history.record_remove(user_id, slug)
        logger.info("removed {!r} from user {}", slug, user_id)
        return True

    def change_segments_of_user(
        self,
        user_id: int,
        additions: Iterable[Addition] = (),
        removals: Sequence[str] = (),
    ) -> ChangeResult:
        result = ChangeResult(user_id=user_id)
        for slug, deadline in additions:
            if self.add_segment_to_user(user_id, slug, deadline):
                result.added.append(slug)
        for slug in removals:
            if self.remove_segment_from_user(user_id, slug):
                result.removed.append(slug)
        return result

    def get_active_segments_of_user(self, user_id: int) -> ActiveSegments:
        self._require_user(user_id)
        return ActiveSegments(user_id=user_id, segments=self.memberships.active_for_user(user_id))
