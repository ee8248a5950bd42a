# src/taskforge/core/query/builder.py
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple, Type

from ..errors import InvalidQueryParameter
from ..models.tasks import TaskPriority, TaskStatus
from .operators import OPERATOR_MAP, contains_pattern

# Fields a client may sort on. Anything else falls back to DEFAULT_SORT_FIELD.
SORTABLE_FIELDS = (
    "id",
    "title",
    "description",
    "status",
    "priority",
    "due_date",
    "created_at",
    "updated_at",
)
SORT_ALIASES = {"_id": "id", "createdAt": "created_at", "updatedAt": "updated_at"}
DEFAULT_SORT_FIELD = "created_at"

SEARCH_FIELDS = ("title", "description")

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100
# Keeps (page - 1) * per_page inside a signed 64-bit OFFSET.
MAX_PAGE = (2**63 - 1) // MAX_PER_PAGE

# Anything longer than 19 digits is past every bound anyway.
_LEADING_INT = re.compile(r"[+-]?\d{1,19}")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class FilterCondition:
    """A single `field <op> value` predicate."""

    field: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in OPERATOR_MAP:
            raise ValueError(f"Unknown operator: {self.op}")


@dataclass(frozen=True)
class SearchTerm:
    """Literal, case-insensitive substring search across several fields."""

    text: str
    fields: Tuple[str, ...] = SEARCH_FIELDS

    @property
    def conditions(self) -> Tuple[FilterCondition, ...]:
        pattern = contains_pattern(self.text)
        return tuple(FilterCondition(field, "ilike", pattern) for field in self.fields)


@dataclass(frozen=True)
class QuerySpec:
    """Validated filter, sort and page window for one list request.

    `conditions` are ANDed together; the conditions of `search`, if any,
    are ORed and then ANDed with the rest.
    """

    conditions: Tuple[FilterCondition, ...] = ()
    search: Optional[SearchTerm] = None
    sort_by: str = DEFAULT_SORT_FIELD
    sort_dir: SortDirection = SortDirection.DESC
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.per_page


class QueryBuilder:
    """
    Builds a QuerySpec from raw, untrusted list-request parameters.
    """

    def __init__(self, params: Mapping[str, Any]):
        self.params = params

    def build(self) -> QuerySpec:
        """
        Applies filters, search, sorting, and pagination rules to the params.

        Raises InvalidQueryParameter for unknown status/priority values and
        for dates that are not ISO-8601.
        """
        conditions: List[FilterCondition] = []

        for name, enum_type in (("status", TaskStatus), ("priority", TaskPriority)):
            value = self._enum_value(name, enum_type)
            if value is not None:
                conditions.append(FilterCondition(name, "eq", value))

        due_from = self._date_value("due_date_from")
        if due_from is not None:
            conditions.append(FilterCondition("due_date", "gte", due_from))

        due_to = self._date_value("due_date_to")
        if due_to is not None:
            conditions.append(FilterCondition("due_date", "lte", due_to))

        search = self._param("search")

        return QuerySpec(
            conditions=tuple(conditions),
            search=SearchTerm(search) if search else None,
            sort_by=self._sort_field(),
            sort_dir=self._sort_direction(),
            page=min(max(DEFAULT_PAGE, self._int_value("page", DEFAULT_PAGE)), MAX_PAGE),
            per_page=min(max(1, self._int_value("per_page", DEFAULT_PER_PAGE)), MAX_PER_PAGE),
        )

    def _param(self, name: str) -> Optional[str]:
        value = self.params.get(name)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def _enum_value(self, name: str, enum_type: Type[Enum]) -> Optional[str]:
        value = self._param(name)
        if value is None:
            return None
        allowed = [member.value for member in enum_type]
        if value not in allowed:
            raise InvalidQueryParameter(name, value, f"must be one of: {', '.join(allowed)}")
        return value

    def _date_value(self, name: str) -> Optional[datetime]:
        value = self._param(name)
        if value is None:
            return None
        try:
            parsed = datetime.fromisoformat(value)
            # Stored timestamps are naive UTC
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except (ValueError, OverflowError):
            raise InvalidQueryParameter(name, value, "expected an ISO-8601 date") from None
        return parsed

    def _int_value(self, name: str, default: int) -> int:
        """Leading integer of the value ("2.5" -> 2, "12abc" -> 12), else `default`."""
        value = self._param(name)
        if value is None:
            return default
        match = _LEADING_INT.match(value)
        return int(match.group()) if match else default

    def _sort_field(self) -> str:
        value = self._param("sort_by")
        if value is None:
            return DEFAULT_SORT_FIELD
        value = SORT_ALIASES.get(value, value)
        return value if value in SORTABLE_FIELDS else DEFAULT_SORT_FIELD

    def _sort_direction(self) -> SortDirection:
        value = self._param("sort_order")
        if value is not None and value.lower() == "asc":
            return SortDirection.ASC
        return SortDirection.DESC
