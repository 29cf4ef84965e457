"""Membership of a user in a segment, optionally bounded by a deadline."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(slots=True)
class Membership:
    user_id: int
    slug: str
    deadline: Optional[datetime] = None

    def is_active(self, now: datetime) -> bool:
        """A membership without a deadline never expires."""
        return self.deadline is None or self.deadline > now


@dataclass(slots=True)
class ActiveSegments:
    user_id: int
    segments: List[Membership] = field(default_factory=list)


@dataclass(slots=True)
class ChangeResult:
    """Slugs that actually changed state during a batch change."""

    user_id: int
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
