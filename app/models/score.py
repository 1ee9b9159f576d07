"""Compatibility score models."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .business import Business


class RankingFactors(BaseModel):
    """The six sub-scores behind a compatibility score.

    Field aliases are the camelCase names used in the advisory service's
    JSON reply; either spelling is accepted on input.
    """

    model_config = ConfigDict(populate_by_name=True)

    price_match: int = Field(ge=0, le=100, alias="priceMatch")
    industry_fit: int = Field(ge=0, le=100, alias="industryFit")
    risk_alignment: int = Field(ge=0, le=100, alias="riskAlignment")
    involvement_fit: int = Field(ge=0, le=100, alias="involvementFit")
    location_score: int = Field(ge=0, le=100, alias="locationScore")
    financial_health: int = Field(ge=0, le=100, alias="financialHealth")


class RankingResult(BaseModel):
    """Output of a scorer for one (business, preferences) pair."""

    score: int = Field(ge=0, le=100)
    reasoning: str
    factors: RankingFactors
    source: Literal["advisory", "heuristic"] = "heuristic"


class BusinessScore(BaseModel):
    """Cached score for a (user, business) pair."""

    id: Optional[int] = None
    user_id: str
    business_id: str
    score: int = Field(ge=0, le=100)
    reasoning: Optional[str] = None
    factors: Optional[RankingFactors] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_result(cls, user_id: str, business_id: str, result: RankingResult) -> "BusinessScore":
        return cls(
            user_id=user_id,
            business_id=business_id,
            score=result.score,
            reasoning=result.reasoning,
            factors=result.factors,
        )


class RankedBusiness(BusinessScore):
    """A cached score with its business attached."""

    business: Business
