"""Catalog search and filtering."""

from .filters import (
    EMPLOYEE_BUCKETS,
    build_predicates,
    filter_businesses,
    parse_employee_range,
)

__all__ = [
    "EMPLOYEE_BUCKETS",
    "build_predicates",
    "filter_businesses",
    "parse_employee_range",
]
