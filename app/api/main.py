"""FastAPI application setup."""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings as default_settings, Settings
from app.context import AppContext
from app.errors import RankingError, RepositoryError
from .errors import ranking_exception_handler, repository_exception_handler
from .routes import router


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """Create the API with an explicitly wired context."""
    settings = settings or default_settings
    context = context or AppContext.build(settings)

    app = FastAPI(
        title="Business Match",
        description="Rank businesses for sale by compatibility with investor preferences",
        version="0.1.0",
    )
    app.state.context = context

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RankingError, ranking_exception_handler)
    app.add_exception_handler(RepositoryError, repository_exception_handler)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": "0.1.0", "scorer": settings.scorer}

    # Include API routes
    app.include_router(router, prefix="/api")

    return app
