"""Catalog search criteria schema."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SearchCriteria(BaseModel):
    """Independent filters over the business catalog.

    Every field is optional; an absent field places no constraint on that
    dimension.
    """

    price_range: Optional[tuple[int, int]] = Field(
        default=None, description="Inclusive (min, max) asking price in USD"
    )
    revenue_range: Optional[tuple[int, int]] = Field(
        default=None, description="Inclusive (min, max) annual revenue in USD"
    )
    location: Optional[str] = Field(
        default=None, description="Case-insensitive substring of the listing location"
    )
    industries: list[str] = Field(
        default_factory=list, description="Industry labels to include"
    )
    employees: Optional[str] = Field(
        default=None, description="Employee bucket: '1-5', '6-15', '16-50' or '50+'"
    )
    query: Optional[str] = Field(
        default=None,
        description="Free text matched against name, description, industry and location",
    )

    def is_empty(self) -> bool:
        """True when no criterion is set."""
        return not (
            self.price_range
            or self.revenue_range
            or self.location
            or self.industries
            or self.employees
            or self.query
        )


class SearchHistoryEntry(BaseModel):
    """A recorded free-text search."""

    id: Optional[int] = None
    user_id: str
    query: str
    filters: Optional[SearchCriteria] = None
    results_count: int = 0
    created_at: Optional[datetime] = None
