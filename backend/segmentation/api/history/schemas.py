"""Pydantic schemas for the history report."""
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class HistoryQuery(BaseModel):
    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)
    user_id: Optional[int] = None


class HistoryRecordOut(BaseModel):
    user_id: int
    slug: str
    action_date: datetime
    operation_type: Literal["ADDING", "REMOVING"]
