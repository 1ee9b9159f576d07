"""Wiring of repositories, scorer and ranking service."""

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import sessionmaker

from app.config import Settings
from app.models.database import init_db
from app.rank import RankingService, build_scorer
from app.storage import (
    BusinessCatalog,
    PreferencesRepository,
    ScoreRepository,
    SearchHistoryRepository,
    UserRepository,
)


@dataclass
class AppContext:
    """Everything the API and CLI need, built from one settings object."""

    settings: Settings
    users: UserRepository
    preferences: PreferencesRepository
    catalog: BusinessCatalog
    scores: ScoreRepository
    history: SearchHistoryRepository
    ranking: RankingService

    @classmethod
    def build(
        cls,
        settings: Settings,
        session_factory: Optional[sessionmaker] = None,
        advisory_client: Optional[Any] = None,
    ) -> "AppContext":
        """Build a context; tests pass their own session factory and client."""
        session_factory = session_factory or init_db(settings.database_url)

        users = UserRepository(session_factory)
        preferences = PreferencesRepository(session_factory)
        catalog = BusinessCatalog(session_factory)
        scores = ScoreRepository(session_factory)
        history = SearchHistoryRepository(session_factory)

        ranking = RankingService(
            scorer=build_scorer(settings, client=advisory_client),
            scores=scores,
            preferences=preferences,
            catalog=catalog,
            settings=settings,
        )

        return cls(
            settings=settings,
            users=users,
            preferences=preferences,
            catalog=catalog,
            scores=scores,
            history=history,
            ranking=ranking,
        )
