"""Compatibility scoring and ranking engine."""

from typing import Any, Optional

from app.config import Settings
from .base import BusinessScorer
from .heuristic import HeuristicScorer
from .advisory import AdvisoryScorer
from .location import is_any_location, location_matches
from .service import RankingService


def build_scorer(settings: Settings, client: Optional[Any] = None) -> BusinessScorer:
    """Select the scorer variant named by ``settings.scorer``."""
    if settings.scorer == "heuristic":
        return HeuristicScorer()
    return AdvisoryScorer(settings, client=client)


__all__ = [
    "BusinessScorer",
    "HeuristicScorer",
    "AdvisoryScorer",
    "RankingService",
    "build_scorer",
    "is_any_location",
    "location_matches",
]
