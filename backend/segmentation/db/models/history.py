"""Append-only audit log of membership changes."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Enum, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base
from ...domain.history import OperationType


class HistoryModel(Base):
    __tablename__ = "history"
    __table_args__ = (Index("ix_history_user_action_date", "user_id", "action_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    action_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    operation_type: Mapped[OperationType] = mapped_column(
        Enum(OperationType, name="operation_type", native_enum=False, length=16),
        nullable=False,
    )
