"""Search history per user."""

import json
from typing import Optional

from app.models import SearchCriteria, SearchHistoryEntry
from app.models.database import DBSearchHistory
from .base import Repository


def to_entry(row: DBSearchHistory) -> SearchHistoryEntry:
    return SearchHistoryEntry(
        id=row.id,
        user_id=row.user_id,
        query=row.query,
        filters=SearchCriteria(**json.loads(row.filters)) if row.filters else None,
        results_count=row.results_count,
        created_at=row.created_at,
    )


class SearchHistoryRepository(Repository):
    def record(
        self,
        user_id: str,
        query: str,
        results_count: int,
        filters: Optional[SearchCriteria] = None,
    ) -> SearchHistoryEntry:
        with self.session() as session:
            row = DBSearchHistory(
                user_id=user_id,
                query=query,
                results_count=results_count,
                filters=filters.model_dump_json(exclude_none=True) if filters else None,
            )
            session.add(row)
            session.flush()
            return to_entry(row)

    def list_for_user(self, user_id: str, limit: int = 20) -> list[SearchHistoryEntry]:
        """Most recent searches first."""
        with self.session() as session:
            rows = (
                session.query(DBSearchHistory)
                .filter_by(user_id=user_id)
                .order_by(DBSearchHistory.created_at.desc(), DBSearchHistory.id.desc())
                .limit(limit)
                .all()
            )
            return [to_entry(row) for row in rows]
