"""Multi-criteria filter over the business catalog.

Each criterion is an independent predicate and a listing must satisfy all
of them. Predicates do not depend on each other, so the order in which they
run never changes the result set, only how much work is done; cheaper
numeric checks run before the string scans. Input order is preserved.
"""

import logging
from typing import Callable, Iterable, Optional

from app.models import Business, SearchCriteria

logger = logging.getLogger(__name__)

Predicate = Callable[[Business], bool]

EMPLOYEE_BUCKETS: dict[str, tuple[int, Optional[int]]] = {
    "1-5": (1, 5),
    "6-15": (6, 15),
    "16-50": (16, 50),
    "50+": (50, None),
}

_NO_LOCATION = {"", "any", "any location"}


def parse_employee_range(bucket: Optional[str]) -> tuple[Optional[int], Optional[int]]:
    """Map an employee bucket to inclusive (min, max); unknown buckets are unbounded."""
    if not bucket:
        return None, None
    return EMPLOYEE_BUCKETS.get(bucket.strip(), (None, None))


def _in_range(value: int, bounds: tuple[int, int]) -> bool:
    low, high = bounds
    return low <= value <= high


def build_predicates(criteria: SearchCriteria) -> list[Predicate]:
    """One predicate per criterion that is set."""
    predicates: list[Predicate] = []

    if criteria.price_range:
        price_range = criteria.price_range
        predicates.append(lambda b: _in_range(b.asking_price, price_range))

    if criteria.revenue_range:
        revenue_range = criteria.revenue_range
        predicates.append(lambda b: _in_range(b.annual_revenue, revenue_range))

    low, high = parse_employee_range(criteria.employees)
    if low is not None:
        predicates.append(lambda b: b.employees >= low)
    if high is not None:
        predicates.append(lambda b: b.employees <= high)

    if criteria.industries:
        industries = {i.strip().lower() for i in criteria.industries}
        predicates.append(lambda b: b.industry.strip().lower() in industries)

    if criteria.location and criteria.location.strip().lower() not in _NO_LOCATION:
        location = criteria.location.strip().lower()
        predicates.append(lambda b: location in b.location.lower())

    if criteria.query and criteria.query.strip():
        text = criteria.query.strip().lower()
        predicates.append(
            lambda b: any(
                text in field.lower()
                for field in (b.name, b.description, b.industry, b.location)
            )
        )

    return predicates


def filter_businesses(
    businesses: Iterable[Business],
    criteria: SearchCriteria,
) -> list[Business]:
    """Listings satisfying every criterion that is set."""
    predicates = build_predicates(criteria)
    if not predicates:
        return list(businesses)

    results = [b for b in businesses if all(p(b) for p in predicates)]
    logger.debug(f"Filter kept {len(results)} listings ({len(predicates)} predicates)")
    return results
