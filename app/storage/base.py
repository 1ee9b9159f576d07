"""Session handling shared by the repositories."""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.errors import RepositoryError

logger = logging.getLogger(__name__)


class Repository:
    """Base class for repositories backed by a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Open a session, commit on success, wrap database errors."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"{type(self).__name__} database error: {e}")
            raise RepositoryError(str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
