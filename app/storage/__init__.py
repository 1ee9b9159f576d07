"""Persistence collaborators for the ranking engine."""

from .base import Repository
from .catalog import BusinessCatalog
from .history import SearchHistoryRepository
from .preferences import PreferencesRepository
from .scores import ScoreRepository
from .users import User, UserRepository

__all__ = [
    "Repository",
    "BusinessCatalog",
    "SearchHistoryRepository",
    "PreferencesRepository",
    "ScoreRepository",
    "User",
    "UserRepository",
]
