"""Domain dataclass for Segment entities (DB-agnostic)."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Segment:
    id: int
    slug: str
    description: str = ""
