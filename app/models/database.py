"""SQLAlchemy database models and setup."""

import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    DateTime,
    Text,
    ForeignKey,
    Index,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from app.config import settings

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class DBUser(Base):
    """Account row that preferences, scores and history hang off."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    username = Column(String(255), unique=True, nullable=False)
    email = Column(String(255), unique=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    preferences = relationship(
        "DBUserPreferences",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    scores = relationship(
        "DBBusinessScore",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    searches = relationship(
        "DBSearchHistory",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class DBUserPreferences(Base):
    """Investment preferences captured at onboarding, one row per user."""

    __tablename__ = "user_preferences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    capital_range = Column(Text, nullable=False)  # JSON [min, max]
    target_income = Column(String(100), nullable=False)
    risk_tolerance = Column(String(100), nullable=False)
    involvement = Column(String(100), nullable=False)
    location = Column(String(255), nullable=False, default="any")
    industries = Column(Text, nullable=False, default="[]")  # JSON array
    business_size = Column(String(100), nullable=False)
    payback_period = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("DBUser", back_populates="preferences")

    def get_capital_range(self) -> tuple[int, int]:
        low, high = json.loads(self.capital_range)
        return low, high

    def set_capital_range(self, capital_range: tuple[int, int]):
        self.capital_range = json.dumps(list(capital_range))

    def get_industries(self) -> list[str]:
        return json.loads(self.industries) if self.industries else []

    def set_industries(self, industries: list[str]):
        self.industries = json.dumps(industries)


class DBBusiness(Base):
    """Stored business-for-sale listing."""

    __tablename__ = "businesses"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(500), nullable=False)
    description = Column(Text, nullable=False, default="")
    location = Column(String(255), nullable=False)
    industry = Column(String(255), nullable=False)
    asking_price = Column(Integer, nullable=False)
    annual_revenue = Column(Integer, nullable=False, default=0)
    cash_flow = Column(Integer, nullable=False, default=0)
    ebitda = Column(Integer, nullable=False, default=0)
    employees = Column(Integer, nullable=False, default=0)
    year_established = Column(Integer)

    source_url = Column(String(1000), nullable=False, default="")
    source_site = Column(String(255), nullable=False, default="")
    seller_info = Column(Text)  # JSON dict
    business_details = Column(Text)  # JSON dict

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    scores = relationship(
        "DBBusinessScore",
        back_populates="business",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_business_industry", "industry"),
        Index("idx_business_created", "created_at"),
    )

    def get_seller_info(self) -> Optional[dict]:
        return json.loads(self.seller_info) if self.seller_info else None

    def set_seller_info(self, info: Optional[dict]):
        self.seller_info = json.dumps(info) if info is not None else None

    def get_business_details(self) -> Optional[dict]:
        return json.loads(self.business_details) if self.business_details else None

    def set_business_details(self, details: Optional[dict]):
        self.business_details = json.dumps(details) if details is not None else None


class DBBusinessScore(Base):
    """Cached compatibility score for a (user, business) pair."""

    __tablename__ = "business_scores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    business_id = Column(
        String(36), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False
    )
    score = Column(Integer, nullable=False)
    reasoning = Column(Text)
    factors = Column(Text)  # JSON dict of the six sub-scores
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("DBUser", back_populates="scores")
    business = relationship("DBBusiness", back_populates="scores")

    __table_args__ = (
        UniqueConstraint("user_id", "business_id", name="user_business_unique"),
        Index("idx_score_user_score", "user_id", "score"),
    )

    def get_factors(self) -> Optional[dict]:
        return json.loads(self.factors) if self.factors else None


class DBSearchHistory(Base):
    """Free-text searches run by a user."""

    __tablename__ = "search_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    query = Column(Text, nullable=False)
    filters = Column(Text)  # JSON of SearchCriteria
    results_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("DBUser", back_populates="searches")

    __table_args__ = (Index("idx_search_user_created", "user_id", "created_at"),)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Database initialization
def init_db(db_url: Optional[str] = None) -> sessionmaker:
    """Initialize database and return session maker."""
    db_url = db_url or settings.database_url

    url = make_url(db_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(db_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
