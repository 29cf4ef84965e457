"""Users blueprint: users and their segment memberships."""
from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, request
from sqlalchemy.orm import Session

from ...db.session import db
from ...errors import ok
from ...services.segmentation_service import SegmentationService
from ...services.user_service import UserService
from .schemas import (
    ChangeUserSegmentsIn,
    ChangeUserSegmentsOut,
    SegmentWithDeadline,
    UserActiveSegmentsOut,
    UserCreateIn,
    UserCreatedOut,
    UserOut,
)


bp = Blueprint("users", __name__)


def _session() -> Session:
    assert db.Session is not None, "DB session is not initialized"
    return db.Session()


@bp.get("/")
def list_users():
    items = [UserOut.model_validate(asdict(u)).model_dump() for u in UserService(_session()).list_users()]
    return ok(items)


@bp.post("/")
def create_user():
    payload = UserCreateIn.model_validate_json(request.get_data() or b"{}")
    user_id = SegmentationService(_session()).create_user(payload.name)
    return ok(UserCreatedOut(id=user_id).model_dump(), 201)


@bp.get("/<int:user_id>")
def get_user(user_id: int):
    user = UserService(_session()).get_user(user_id)
    return ok(UserOut.model_validate(asdict(user)).model_dump())


@bp.post("/<int:user_id>/segments")
def change_segments_of_user(user_id: int):
    payload = ChangeUserSegmentsIn.model_validate_json(request.get_data() or b"{}")
    result = SegmentationService(_session()).change_segments_of_user(
        user_id,
        additions=[(item.slug, item.deadline_date) for item in payload.add_to_user],
        removals=payload.take_from_user,
    )
    return ok(ChangeUserSegmentsOut.model_validate(asdict(result)).model_dump())


@bp.get("/<int:user_id>/active")
def get_active_segments_of_user(user_id: int):
    active = SegmentationService(_session()).get_active_segments_of_user(user_id)
    out = UserActiveSegmentsOut(
        user_id=active.user_id,
        segments=[SegmentWithDeadline(slug=m.slug, deadline_date=m.deadline) for m in active.segments],
    )
    return ok(out.model_dump(mode="json"))
