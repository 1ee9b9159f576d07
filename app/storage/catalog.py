"""Business catalog: stored listings and criteria queries."""

import logging
from datetime import datetime
from typing import Optional

from app.models import (
    Business,
    BusinessCreate,
    BusinessDetails,
    SearchCriteria,
    SellerInfo,
)
from app.models.database import DBBusiness
from app.search import filter_businesses
from .base import Repository

logger = logging.getLogger(__name__)


def to_business(row: DBBusiness) -> Business:
    seller_info = row.get_seller_info()
    details = row.get_business_details()
    return Business(
        id=row.id,
        name=row.name,
        description=row.description,
        location=row.location,
        industry=row.industry,
        asking_price=row.asking_price,
        annual_revenue=row.annual_revenue,
        cash_flow=row.cash_flow,
        ebitda=row.ebitda,
        employees=row.employees,
        year_established=row.year_established,
        source_url=row.source_url,
        source_site=row.source_site,
        seller_info=SellerInfo(**seller_info) if seller_info else None,
        business_details=BusinessDetails(**details) if details else None,
        is_active=row.is_active,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class BusinessCatalog(Repository):
    """Listings that the ranking engine reads."""

    def get(self, business_id: str) -> Optional[Business]:
        """Fetch an active listing by id."""
        with self.session() as session:
            row = session.query(DBBusiness).filter_by(id=business_id, is_active=True).first()
            return to_business(row) if row else None

    def find(
        self,
        criteria: Optional[SearchCriteria] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Business]:
        """Active listings matching the criteria, newest first."""
        with self.session() as session:
            rows = (
                session.query(DBBusiness)
                .filter(DBBusiness.is_active.is_(True))
                .order_by(DBBusiness.created_at.desc(), DBBusiness.name.asc())
                .all()
            )
            businesses = [to_business(row) for row in rows]

        if criteria is not None and not criteria.is_empty():
            businesses = filter_businesses(businesses, criteria)

        end = offset + limit if limit is not None else None
        return businesses[offset:end]

    def search(
        self,
        query: str,
        criteria: Optional[SearchCriteria] = None,
        limit: int = 50,
    ) -> list[Business]:
        """Free-text search, optionally narrowed by further criteria."""
        criteria = (criteria or SearchCriteria()).model_copy(update={"query": query})
        return self.find(criteria, limit=limit)

    def create(self, business: BusinessCreate) -> Business:
        with self.session() as session:
            row = DBBusiness(
                **business.model_dump(exclude={"seller_info", "business_details"})
            )
            row.set_seller_info(business.seller_info.model_dump() if business.seller_info else None)
            row.set_business_details(
                business.business_details.model_dump() if business.business_details else None
            )
            session.add(row)
            session.flush()
            logger.debug(f"Created business {row.id}: {row.name}")
            return to_business(row)

    def deactivate(self, business_id: str) -> bool:
        """Hide a listing from queries and rankings without deleting its scores."""
        with self.session() as session:
            row = session.query(DBBusiness).filter_by(id=business_id).first()
            if not row:
                return False
            row.is_active = False
            row.updated_at = datetime.utcnow()
            return True

    def delete(self, business_id: str) -> bool:
        """Delete a listing; its scores cascade."""
        with self.session() as session:
            row = session.query(DBBusiness).filter_by(id=business_id).first()
            if not row:
                return False
            session.delete(row)
            return True
