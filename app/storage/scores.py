"""Score repository: cached (user, business) compatibility scores."""

import json
import logging
from typing import Optional

from sqlalchemy.dialects import postgresql, sqlite

from app.errors import RepositoryError
from app.models import BusinessScore, RankedBusiness, RankingFactors
from app.models.database import DBBusiness, DBBusinessScore
from .base import Repository
from .catalog import to_business

logger = logging.getLogger(__name__)


def to_score(row: DBBusinessScore) -> BusinessScore:
    factors = row.get_factors()
    return BusinessScore(
        id=row.id,
        user_id=row.user_id,
        business_id=row.business_id,
        score=row.score,
        reasoning=row.reasoning,
        factors=RankingFactors(**factors) if factors else None,
        created_at=row.created_at,
    )


def _dump_factors(factors: Optional[RankingFactors]) -> Optional[str]:
    return json.dumps(factors.model_dump()) if factors else None


# Dialects with INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def upsert_insert(dialect: str):
    """The dialect-specific ``insert`` construct used for upserts."""
    try:
        return UPSERT_INSERTS[dialect]
    except KeyError:
        raise RepositoryError(
            f"Score upsert is not supported on the {dialect} dialect; use sqlite or postgresql"
        ) from None


class ScoreRepository(Repository):
    """Persisted scores with insert-or-update on (user_id, business_id)."""

    def get(self, user_id: str, business_id: str) -> Optional[BusinessScore]:
        with self.session() as session:
            row = (
                session.query(DBBusinessScore)
                .filter_by(user_id=user_id, business_id=business_id)
                .first()
            )
            return to_score(row) if row else None

    def get_top_n(
        self,
        user_id: str,
        limit: Optional[int] = None,
        active_only: bool = True,
    ) -> list[RankedBusiness]:
        """Scores for a user joined to their businesses, best first.

        ``limit=None`` returns every row. Deactivated businesses are left out
        unless ``active_only`` is False.
        """
        with self.session() as session:
            query = (
                session.query(DBBusinessScore, DBBusiness)
                .join(DBBusiness, DBBusinessScore.business_id == DBBusiness.id)
                .filter(DBBusinessScore.user_id == user_id)
                .order_by(DBBusinessScore.score.desc(), DBBusinessScore.id.asc())
            )
            if active_only:
                query = query.filter(DBBusiness.is_active.is_(True))
            if limit is not None:
                query = query.limit(limit)

            return [
                RankedBusiness(**to_score(score).model_dump(), business=to_business(business))
                for score, business in query.all()
            ]

    def upsert(self, score: BusinessScore) -> BusinessScore:
        """Insert a score, or overwrite score/reasoning/factors of the existing pair."""
        values = {
            "user_id": score.user_id,
            "business_id": score.business_id,
            "score": score.score,
            "reasoning": score.reasoning,
            "factors": _dump_factors(score.factors),
        }

        with self.session() as session:
            insert = upsert_insert(session.get_bind().dialect.name)
            stmt = insert(DBBusinessScore).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "business_id"],
                set_={
                    "score": stmt.excluded.score,
                    "reasoning": stmt.excluded.reasoning,
                    "factors": stmt.excluded.factors,
                },
            )
            session.execute(stmt)

            row = (
                session.query(DBBusinessScore)
                .filter_by(user_id=score.user_id, business_id=score.business_id)
                .one()
            )
            return to_score(row)

    def update(
        self,
        user_id: str,
        business_id: str,
        score: int,
        reasoning: Optional[str] = None,
        factors: Optional[RankingFactors] = None,
    ) -> Optional[BusinessScore]:
        """Overwrite an existing row; returns None when the pair was never scored."""
        with self.session() as session:
            row = (
                session.query(DBBusinessScore)
                .filter_by(user_id=user_id, business_id=business_id)
                .first()
            )
            if not row:
                return None

            row.score = score
            row.reasoning = reasoning
            row.factors = _dump_factors(factors)
            session.flush()
            return to_score(row)
