"""Reporting over the membership history log."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from ..db.repositories.history_repo import HistoryRepository
from ..domain.history import HistoryRecord
from ..exceptions import InvalidInput


class HistoryService:
    def __init__(self, session: Session) -> None:
        self.repo = HistoryRepository(session)

    def list_history(
        self,
        user_id: Optional[int] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[HistoryRecord]:
        if since is not None and until is not None and since >= until:
            raise InvalidInput("'since' must be earlier than 'until'")
        return self.repo.list(user_id=user_id, since=since, until=until)

    def history_for_period(self, year: int, month: int, user_id: Optional[int] = None) -> List[HistoryRecord]:
        """Records whose action date falls within the given calendar month (UTC)."""
        if not 1 <= month <= 12:
            raise InvalidInput(f"month must be between 1 and 12, got {month}")
        if not 1 <= year <= 9999:
            raise InvalidInput(f"year out of range: {year}")
        since = datetime(year, month, 1)
        if month < 12:
            until: Optional[datetime] = datetime(year, month + 1, 1)
        elif year < 9999:
            until = datetime(year + 1, 1, 1)
        else:
            # datetime cannot represent year 10000; the month runs to the end of time.
            until = None
        return self.list_history(user_id=user_id, since=since, until=until)
