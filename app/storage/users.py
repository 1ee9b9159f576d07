"""Minimal user records for ownership and cascading deletes."""

from typing import Optional

from pydantic import BaseModel

from app.models.database import DBUser
from .base import Repository


class User(BaseModel):
    id: str
    username: str
    email: Optional[str] = None


class UserRepository(Repository):
    """Users are created by the account layer; ranking only needs the id."""

    def get(self, user_id: str) -> Optional[User]:
        with self.session() as session:
            row = session.query(DBUser).filter_by(id=user_id).first()
            return User(id=row.id, username=row.username, email=row.email) if row else None

    def create(self, username: str, email: Optional[str] = None) -> User:
        with self.session() as session:
            row = DBUser(username=username, email=email)
            session.add(row)
            session.flush()
            return User(id=row.id, username=row.username, email=row.email)

    def delete(self, user_id: str) -> bool:
        """Delete a user; preferences, scores and history cascade."""
        with self.session() as session:
            row = session.query(DBUser).filter_by(id=user_id).first()
            if not row:
                return False
            session.delete(row)
            return True
