"""Pydantic request/response schemas for Users API."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UserCreateIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class UserCreatedOut(BaseModel):
    id: int


class UserOut(BaseModel):
    id: int
    name: str


class SegmentWithDeadline(BaseModel):
    slug: str = Field(..., min_length=1, max_length=255)
    deadline_date: Optional[datetime] = None


class ChangeUserSegmentsIn(BaseModel):
    add_to_user: List[SegmentWithDeadline] = Field(default_factory=list)
    take_from_user: List[str] = Field(default_factory=list)


class ChangeUserSegmentsOut(BaseModel):
    user_id: int
    added: List[str]
    removed: List[str]


class UserActiveSegmentsOut(BaseModel):
    user_id: int
    segments: List[SegmentWithDeadline]
