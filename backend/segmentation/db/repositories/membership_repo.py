"""Membership store: the users_segments relation with optional deadlines."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .base import reading, writing
from ..models.membership import MembershipModel
from ...domain.membership import Membership
from ...exceptions import WriteError
from ...utils.timeutil import Clock, to_naive_utc, utcnow


def _to_dc(m: MembershipModel) -> Membership:
    return Membership(user_id=m.user_id, slug=m.slug, deadline=m.deadline_date)


class MembershipRepository:
    def __init__(self, session: Session, clock: Clock = utcnow) -> None:
        self.session = session
        self.clock = clock

    def exists(self, user_id: int, slug: str) -> bool:
        """Raw row existence; expired rows still count."""
        return self._row_exists(user_id, slug)

    def _row_exists(self, user_id: int, slug: str) -> bool:
        stmt = (
            select(MembershipModel.id)
            .where(MembershipModel.user_id == user_id, MembershipModel.slug == slug)
            .limit(1)
        )
        with reading(self.session, f"checking membership of user {user_id} in {slug!r}"):
            return self.session.scalars(stmt).first() is not None

    def add(self, user_id: int, slug: str, deadline: Optional[datetime] = None) -> bool:
        """Insert a membership row.

        Returns ``False`` when the (user_id, slug) unique constraint rejects the
        insert, i.e. another writer added the same pair first. Any other
        integrity violation raises ``WriteError``.
        """
        m = MembershipModel(user_id=user_id, slug=slug, deadline_date=to_naive_utc(deadline))
        with writing(self.session, f"adding {slug!r} to user {user_id}"):
            self.session.add(m)
            try:
                self.session.commit()
            except IntegrityError as exc:
                self.session.rollback()
                if self._row_exists(user_id, slug):
                    return False
                raise WriteError(f"error while adding {slug!r} to user {user_id}") from exc
        return True

    def remove(self, user_id: int, slug: str) -> bool:
        stmt = delete(MembershipModel).where(
            MembershipModel.user_id == user_id, MembershipModel.slug == slug
        )
        with writing(self.session, f"removing {slug!r} from user {user_id}"):
            result = self.session.execute(stmt)
            self.session.commit()
        return result.rowcount > 0

    def remove_slug(self, slug: str) -> List[int]:
        """Delete every membership in ``slug`` and return the affected user ids."""
        with writing(self.session, f"removing memberships of {slug!r}"):
            user_ids = list(
                self.session.scalars(
                    select(MembershipModel.user_id)
                    .where(MembershipModel.slug == slug)
                    .order_by(MembershipModel.user_id)
                ).all()
            )
            self.session.execute(delete(MembershipModel).where(MembershipModel.slug == slug))
            self.session.commit()
        return user_ids

    def active_for_user(self, user_id: int, now: Optional[datetime] = None) -> List[Membership]:
        now = to_naive_utc(now) if now is not None else self.clock()
        stmt = (
            select(MembershipModel)
            .where(
                MembershipModel.user_id == user_id,
                or_(MembershipModel.deadline_date.is_(None), MembershipModel.deadline_date > now),
            )
            .order_by(MembershipModel.slug)
        )
        with reading(self.session, f"reading active segments of user {user_id}"):
            return [_to_dc(m) for m in self.session.scalars(stmt).all()]

    def list_for_user(self, user_id: int) -> List[Membership]:
        """Every stored row for the user, expired ones included."""
        stmt = (
            select(MembershipModel)
            .where(MembershipModel.user_id == user_id)
            .order_by(MembershipModel.slug)
        )
        with reading(self.session, f"reading memberships of user {user_id}"):
            return [_to_dc(m) for m in self.session.scalars(stmt).all()]
