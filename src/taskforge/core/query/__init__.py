"""Query construction and pagination for task listings."""

from taskforge.core.query.builder import (
    FilterCondition,
    QueryBuilder,
    QuerySpec,
    SearchTerm,
    SortDirection,
)
from taskforge.core.query.pagination import Page, paginate

__all__ = [
    "FilterCondition",
    "QueryBuilder",
    "QuerySpec",
    "SearchTerm",
    "SortDirection",
    "Page",
    "paginate",
]
