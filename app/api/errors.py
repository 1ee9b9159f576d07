"""Exception handlers mapping domain errors to HTTP responses."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from app.errors import NotFoundError, PreferencesRequired, RankingError, RepositoryError

logger = logging.getLogger(__name__)


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__,
        },
    )


async def ranking_exception_handler(request: Request, exc: RankingError) -> JSONResponse:
    """Domain errors are user-recoverable."""
    status_code = 400
    if isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, PreferencesRequired):
        logger.info(f"{request.url.path}: {exc}")
    return _error(status_code, exc)


async def repository_exception_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """Store failures are infrastructure errors the client may retry."""
    logger.error(f"Repository failure in {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={
            "success": False,
            "error": "Storage temporarily unavailable",
            "type": exc.__class__.__name__,
        },
    )
