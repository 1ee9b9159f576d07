"""Scorer capability shared by the advisory and heuristic scorers."""

from abc import ABC, abstractmethod

from app.models import Business, RankingResult, UserPreferences


class BusinessScorer(ABC):
    """Abstract interface for compatibility scorers."""

    name: str = "base"

    @abstractmethod
    async def score(
        self,
        business: Business,
        preferences: UserPreferences,
    ) -> RankingResult:
        """
        Score how well a business fits an investor's preferences.

        Args:
            business: The listing to score
            preferences: The investor's stored preferences

        Returns:
            A populated ranking result with a 0-100 score and factor map
        """
        pass
