"""Audit records of membership changes."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime


class OperationType(str, enum.Enum):
    ADDING = "ADDING"
    REMOVING = "REMOVING"


@dataclass(slots=True)
class HistoryRecord:
    id: int
    user_id: int
    slug: str
    action_date: datetime
    operation_type: OperationType
