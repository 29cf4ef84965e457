"""Segments blueprint (CRUD)."""
from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, request
from sqlalchemy.orm import Session

from ...db.session import db
from ...errors import ok
from ...services.segment_service import SegmentService
from .schemas import SegmentCreateIn, SegmentCreatedOut, SegmentOut, SegmentUpdateIn


bp = Blueprint("segments", __name__)


def _service() -> SegmentService:
    assert db.Session is not None, "DB session is not initialized"
    session: Session = db.Session()
    return SegmentService(session)


@bp.get("/")
def list_segments():
    svc = _service()
    items = [SegmentOut.model_validate(asdict(s)).model_dump() for s in svc.list_segments()]
    return ok(items)


@bp.get("/<slug>")
def get_segment(slug: str):
    segment = _service().get_by_slug(slug)
    return ok(SegmentOut.model_validate(asdict(segment)).model_dump())


@bp.post("/")
def create_segment():
    payload = SegmentCreateIn.model_validate_json(request.get_data() or b"{}")
    slug = _service().create_segment(payload.slug, payload.description)
    return ok(SegmentCreatedOut(slug=slug).model_dump(), 201)


@bp.put("/<slug>")
def update_segment(slug: str):
    payload = SegmentUpdateIn.model_validate_json(request.get_data() or b"{}")
    updated = _service().update_segment(slug, payload.description)
    return ok(SegmentOut.model_validate(asdict(updated)).model_dump())


@bp.delete("/<slug>")
def delete_segment(slug: str):
    deleted = _service().delete_segment(slug)
    return ok(SegmentOut.model_validate(asdict(deleted)).model_dump())
