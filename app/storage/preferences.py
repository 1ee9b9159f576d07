"""Preferences store keyed by user id."""

import logging
from datetime import datetime
from typing import Optional

from app.models import PreferencesInput, PreferencesUpdate, UserPreferences
from app.models.database import DBUserPreferences
from .base import Repository

logger = logging.getLogger(__name__)


def to_preferences(row: DBUserPreferences) -> UserPreferences:
    return UserPreferences(
        user_id=row.user_id,
        capital_range=row.get_capital_range(),
        target_income=row.target_income,
        risk_tolerance=row.risk_tolerance,
        involvement=row.involvement,
        location=row.location,
        industries=row.get_industries(),
        business_size=row.business_size,
        payback_period=row.payback_period,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _apply(row: DBUserPreferences, values: dict):
    for field, value in values.items():
        if field == "capital_range":
            row.set_capital_range(value)
        elif field == "industries":
            row.set_industries(value)
        else:
            setattr(row, field, value)
    row.updated_at = datetime.utcnow()


class PreferencesRepository(Repository):
    """One preferences record per user, replaced wholesale or patched."""

    def get(self, user_id: str) -> Optional[UserPreferences]:
        with self.session() as session:
            row = session.query(DBUserPreferences).filter_by(user_id=user_id).first()
            return to_preferences(row) if row else None

    def save(self, user_id: str, preferences: PreferencesInput) -> UserPreferences:
        """Create the user's preferences or replace them entirely."""
        with self.session() as session:
            row = session.query(DBUserPreferences).filter_by(user_id=user_id).first()
            if row is None:
                row = DBUserPreferences(user_id=user_id)
                session.add(row)
            _apply(row, preferences.model_dump())
            session.flush()
            return to_preferences(row)

    def patch(self, user_id: str, update: PreferencesUpdate) -> Optional[UserPreferences]:
        """Apply the fields set in ``update``; None when the user has no record."""
        with self.session() as session:
            row = session.query(DBUserPreferences).filter_by(user_id=user_id).first()
            if row is None:
                return None
            _apply(row, update.model_dump(exclude_unset=True, exclude_none=True))
            session.flush()
            return to_preferences(row)
