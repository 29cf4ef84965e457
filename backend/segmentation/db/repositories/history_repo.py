"""Append-only history log of membership changes."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .base import reading, writing
from ..models.history import HistoryModel
from ...domain.history import HistoryRecord, OperationType
from ...utils.timeutil import Clock, to_naive_utc, utcnow


def _to_dc(m: HistoryModel) -> HistoryRecord:
    return HistoryRecord(
        id=m.id,
        user_id=m.user_id,
        slug=m.slug,
        action_date=m.action_date,
        operation_type=OperationType(m.operation_type),
    )


class HistoryRepository:
    def __init__(self, session: Session, clock: Clock = utcnow) -> None:
        self.session = session
        self.clock = clock

    def _record(self, user_id: int, slug: str, operation: OperationType) -> HistoryRecord:
        m = HistoryModel(
            user_id=user_id,
            slug=slug,
            action_date=self.clock(),
            operation_type=operation,
        )
        with writing(self.session, f"saving {operation.value} history record"):
            self.session.add(m)
            self.session.commit()
            self.session.refresh(m)
        return _to_dc(m)

    def record_add(self, user_id: int, slug: str) -> HistoryRecord:
        return self._record(user_id, slug, OperationType.ADDING)

    def record_remove(self, user_id: int, slug: str) -> HistoryRecord:
        return self._record(user_id, slug, OperationType.REMOVING)

    def list(
        self,
        *,
        user_id: Optional[int] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[HistoryRecord]:
        stmt = select(HistoryModel).order_by(HistoryModel.action_date, HistoryModel.id)
        if user_id is not None:
            stmt = stmt.where(HistoryModel.user_id == user_id)
        if since is not None:
            stmt = stmt.where(HistoryModel.action_date >= to_naive_utc(since))
        if until is not None:
            stmt = stmt.where(HistoryModel.action_date < to_naive_utc(until))
        with reading(self.session, "reading history"):
            return [_to_dc(m) for m in self.session.scalars(stmt).all()]
