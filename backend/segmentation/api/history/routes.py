"""History blueprint: monthly report of membership changes."""
from __future__ import annotations

from flask import Blueprint, request
from sqlalchemy.orm import Session

from ...db.session import db
from ...errors import ok
from ...services.history_service import HistoryService
from .schemas import HistoryQuery, HistoryRecordOut


bp = Blueprint("history", __name__)


def _service() -> HistoryService:
    assert db.Session is not None, "DB session is not initialized"
    session: Session = db.Session()
    return HistoryService(session)


@bp.get("/")
def history_report():
    query = HistoryQuery.model_validate(request.args.to_dict())
    records = _service().history_for_period(query.year, query.month, user_id=query.user_id)
    items = [
        HistoryRecordOut(
            user_id=r.user_id,
            slug=r.slug,
            action_date=r.action_date,
            operation_type=r.operation_type.value,
        ).model_dump(mode="json")
        for r in records
    ]
    return ok(items)
