"""Pydantic request/response schemas for Segments API."""
from __future__ import annotations

from pydantic import BaseModel, Field


class SegmentCreateIn(BaseModel):
    slug: str = Field(..., min_length=1, max_length=255)
    description: str = ""


class SegmentUpdateIn(BaseModel):
    description: str = ""


class SegmentCreatedOut(BaseModel):
    slug: str


class SegmentOut(BaseModel):
    id: int
    slug: str
    description: str
