"""Ranking orchestrator: score, cache and serve ranked listings per user."""

import asyncio
import logging
from typing import Optional

from app.config import Settings
from app.errors import PreferencesRequired, RepositoryError
from app.models import (
    Business,
    BusinessScore,
    RankedBusiness,
    RankingResult,
    UserPreferences,
)
from app.storage import BusinessCatalog, PreferencesRepository, ScoreRepository
from .base import BusinessScorer
from .location import is_any_location, location_matches

logger = logging.getLogger(__name__)


class RankingService:
    """Compose a scorer with the score cache, preferences and catalog."""

    def __init__(
        self,
        scorer: BusinessScorer,
        scores: ScoreRepository,
        preferences: PreferencesRepository,
        catalog: BusinessCatalog,
        settings: Settings,
    ):
        self.scorer = scorer
        self.scores = scores
        self.preferences = preferences
        self.catalog = catalog
        self.settings = settings

    async def rank_business(
        self,
        business: Business,
        preferences: UserPreferences,
    ) -> RankingResult:
        """Score one business. Always returns a populated result."""
        return await self.scorer.score(business, preferences)

    async def rank_and_store(
        self,
        user_id: str,
        business: Business,
    ) -> tuple[BusinessScore, RankingResult]:
        """Score one business for a user and persist it, overwriting any cached score."""
        preferences = self._require_preferences(user_id)
        result = await self.rank_business(business, preferences)
        saved = self.scores.upsert(BusinessScore.from_result(user_id, business.id, result))
        return saved, result

    async def rank_multiple_businesses(
        self,
        businesses: list[Business],
        user_id: str,
    ) -> list[RankedBusiness]:
        """Rank a batch, reusing cached scores and skipping items that fail."""
        preferences = self._require_preferences(user_id)

        rankings: list[RankedBusiness] = []
        for business in businesses:
            try:
                existing = self.scores.get(user_id, business.id)
                if existing:
                    rankings.append(RankedBusiness(**existing.model_dump(), business=business))
                    continue

                result = await self.rank_business(business, preferences)
                saved = self.scores.upsert(BusinessScore.from_result(user_id, business.id, result))
                rankings.append(RankedBusiness(**saved.model_dump(), business=business))

                # Space out calls to the advisory service
                await asyncio.sleep(self.settings.rank_delay)

            except RepositoryError:
                raise
            except Exception as e:
                logger.warning(f"Error ranking business {business.id}: {e}")

        rankings.sort(key=lambda r: r.score, reverse=True)
        return rankings

    async def get_top_ranked_businesses(
        self,
        user_id: str,
        limit: Optional[int] = None,
    ) -> list[RankedBusiness]:
        """Best ``limit`` listings for a user, scoring fresh candidates when the cache is thin."""
        if limit is None:
            limit = self.settings.default_ranked_limit
        if limit < 1:
            return []

        preferences = self.preferences.get(user_id)
        location = preferences.location if preferences else None

        def in_location(business: Business) -> bool:
            if is_any_location(location):
                return True
            return location_matches(business.location, location)

        # Over-fetch to leave room for location filtering
        cached = self.scores.get_top_n(user_id, limit * 2)
        cached = [r for r in cached if in_location(r.business)]

        if len(cached) >= limit:
            return cached[:limit]

        scored_ids = {r.business_id for r in cached}
        unscored = [
            b
            for b in self.catalog.find()
            if b.id not in scored_ids and in_location(b)
        ]
        if not unscored:
            return cached[:limit]

        logger.info(
            f"Cache has {len(cached)}/{limit} scores for user {user_id}; "
            f"ranking {min(len(unscored), self.settings.max_new_rankings)} new candidates"
        )
        fresh = await self.rank_multiple_businesses(
            unscored[: self.settings.max_new_rankings], user_id
        )

        merged = cached + [r for r in fresh if r.business_id not in scored_ids]
        merged.sort(key=lambda r: r.score, reverse=True)
        return merged[:limit]

    async def refresh_user_rankings(self, user_id: str) -> int:
        """Re-score every cached business after a preference change.

        Returns the number of rows updated.
        """
        preferences = self.preferences.get(user_id)
        if not preferences:
            logger.info(f"No preferences for user {user_id}; nothing to refresh")
            return 0

        existing = self.scores.get_top_n(user_id, limit=None, active_only=False)
        logger.info(f"Refreshing {len(existing)} rankings for user {user_id}")

        updated = 0
        for ranked in existing:
            try:
                result = await self.rank_business(ranked.business, preferences)
                row = self.scores.update(
                    user_id,
                    ranked.business_id,
                    result.score,
                    result.reasoning,
                    result.factors,
                )
                if row:
                    updated += 1

                await asyncio.sleep(self.settings.refresh_delay)

            except RepositoryError:
                raise
            except Exception as e:
                logger.warning(f"Error re-ranking business {ranked.business_id}: {e}")

        logger.info(f"Refreshed {updated}/{len(existing)} rankings for user {user_id}")
        return updated

    def _require_preferences(self, user_id: str) -> UserPreferences:
        preferences = self.preferences.get(user_id)
        if not preferences:
            raise PreferencesRequired(user_id)
        return preferences
