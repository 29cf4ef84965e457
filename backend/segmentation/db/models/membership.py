"""User <-> segment relation with an optional deadline."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base


class MembershipModel(Base):
    __tablename__ = "users_segments"
    __table_args__ = (UniqueConstraint("user_id", "slug", name="uq_users_segments_user_slug"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # NULL means the membership never expires.
    deadline_date: Mapped[Optional[datetime]] = mapped_column(DateTime, default=None)
