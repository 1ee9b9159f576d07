"""Data models for Business Match."""

from .business import (
    Business,
    BusinessCreate,
    BusinessDetails,
    SellerInfo,
)
from .criteria import SearchCriteria, SearchHistoryEntry
from .preferences import PreferencesInput, PreferencesUpdate, UserPreferences
from .score import (
    BusinessScore,
    RankedBusiness,
    RankingFactors,
    RankingResult,
)

__all__ = [
    "Business",
    "BusinessCreate",
    "BusinessDetails",
    "SellerInfo",
    "SearchCriteria",
    "SearchHistoryEntry",
    "PreferencesInput",
    "PreferencesUpdate",
    "UserPreferences",
    "BusinessScore",
    "RankedBusiness",
    "RankingFactors",
    "RankingResult",
]
