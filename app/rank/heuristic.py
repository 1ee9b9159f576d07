"""Deterministic compatibility scoring with no external calls."""

import logging
from decimal import Decimal, ROUND_HALF_UP

from app.models import Business, RankingFactors, RankingResult, UserPreferences
from .base import BusinessScorer
from .location import is_any_location, location_matches

logger = logging.getLogger(__name__)


class HeuristicScorer(BusinessScorer):
    """Score a business from price, industry, revenue multiple and location."""

    name = "heuristic"

    WEIGHTS = {
        "price_match": Decimal("0.30"),
        "industry_fit": Decimal("0.25"),
        "financial_health": Decimal("0.20"),
        "location_score": Decimal("0.15"),
        "risk_alignment": Decimal("0.05"),
        "involvement_fit": Decimal("0.05"),
    }

    # Revenue multiple thresholds (tuning constants)
    HEALTHY_MULTIPLE = 3
    FAIR_MULTIPLE = 5

    # No signal in the listing data distinguishes these yet
    NEUTRAL_SCORE = 60

    FACTOR_LABELS = {
        "price_match": "asking price vs. capital range",
        "industry_fit": "industry preference",
        "financial_health": "price-to-revenue multiple",
        "location_score": "location",
        "risk_alignment": "risk profile",
        "involvement_fit": "owner involvement",
    }

    async def score(
        self,
        business: Business,
        preferences: UserPreferences,
    ) -> RankingResult:
        return self.calculate(business, preferences)

    def calculate(
        self,
        business: Business,
        preferences: UserPreferences,
    ) -> RankingResult:
        """Compute the fallback score synchronously."""
        factors = RankingFactors(
            price_match=self._score_price(business, preferences),
            industry_fit=self._score_industry(business, preferences),
            risk_alignment=self.NEUTRAL_SCORE,
            involvement_fit=self.NEUTRAL_SCORE,
            location_score=self._score_location(business, preferences),
            financial_health=self._score_financial_health(business),
        )
        score = self._composite(factors)

        return RankingResult(
            score=score,
            reasoning=self._generate_reasoning(factors),
            factors=factors,
            source="heuristic",
        )

    def _score_price(self, business: Business, preferences: UserPreferences) -> int:
        low, high = preferences.capital_range
        return 90 if low <= business.asking_price <= high else 20

    def _score_industry(self, business: Business, preferences: UserPreferences) -> int:
        wanted = {i.strip().lower() for i in preferences.industries}
        return 85 if business.industry.strip().lower() in wanted else 30

    def _score_financial_health(self, business: Business) -> int:
        multiple = business.asking_price / max(business.annual_revenue, 1)
        if multiple < self.HEALTHY_MULTIPLE:
            return 80
        if multiple < self.FAIR_MULTIPLE:
            return 60
        return 30

    def _score_location(self, business: Business, preferences: UserPreferences) -> int:
        if is_any_location(preferences.location):
            return 80
        return 80 if location_matches(business.location, preferences.location) else 40

    def _composite(self, factors: RankingFactors) -> int:
        values = factors.model_dump()
        total = sum(Decimal(values[name]) * weight for name, weight in self.WEIGHTS.items())
        score = int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        return max(0, min(100, score))

    def _generate_reasoning(self, factors: RankingFactors) -> str:
        """Fixed template naming the factors that drove the score."""
        values = factors.model_dump()
        strengths = [self.FACTOR_LABELS[k] for k, v in values.items() if v >= 70]
        concerns = [self.FACTOR_LABELS[k] for k, v in values.items() if v < 50]

        parts = ["Fallback scoring based on price fit, industry match, and basic financial metrics."]
        if strengths:
            parts.append(f"Strong on: {', '.join(strengths)}.")
        if concerns:
            parts.append(f"Weak on: {', '.join(concerns)}.")
        return " ".join(parts)
