from datetime import datetime

import pytest

from taskforge.core.errors import InvalidQueryParameter
from taskforge.core.query.builder import (
    DEFAULT_SORT_FIELD,
    MAX_PAGE,
    FilterCondition,
    QueryBuilder,
    QuerySpec,
    SortDirection,
)


def build(**params) -> QuerySpec:
    return QueryBuilder(params).build()


class TestDefaults:
    def test_empty_params(self):
        spec = build()
        assert spec.conditions == ()
        assert spec.search is None
        assert spec.sort_by == "created_at"
        assert spec.sort_dir is SortDirection.DESC
        assert spec.page == 1
        assert spec.per_page == 10
        assert spec.skip == 0

    def test_blank_values_are_ignored(self):
        spec = build(status="", priority="  ", search="   ", due_date_from="")
        assert spec.conditions == ()
        assert spec.search is None

    def test_spec_is_immutable(self):
        spec = build()
        with pytest.raises(AttributeError):
            spec.page = 3


class TestEnumFilters:
    def test_status_and_priority_become_exact_matches(self):
        spec = build(status="completed", priority="high")
        assert spec.conditions == (
            FilterCondition("status", "eq", "completed"),
            FilterCondition("priority", "eq", "high"),
        )

    @pytest.mark.parametrize("name,value", [("status", "done"), ("status", "Pending"), ("priority", "urgent")])
    def test_unknown_values_are_rejected(self, name, value):
        with pytest.raises(InvalidQueryParameter) as excinfo:
            build(**{name: value})
        assert excinfo.value.status_code == 400
        assert excinfo.value.name == name
        assert name in excinfo.value.message


class TestDateRange:
    def test_from_and_to(self):
        spec = build(due_date_from="2024-01-05", due_date_to="2024-01-10T18:30:00")
        assert spec.conditions == (
            FilterCondition("due_date", "gte", datetime(2024, 1, 5)),
            FilterCondition("due_date", "lte", datetime(2024, 1, 10, 18, 30)),
        )

    def test_aware_dates_are_normalised_to_naive_utc(self):
        spec = build(due_date_from="2024-01-05T02:00:00+02:00")
        assert spec.conditions[0].value == datetime(2024, 1, 5, 0, 0)

    def test_zulu_suffix(self):
        spec = build(due_date_to="2024-01-05T00:00:00Z")
        assert spec.conditions[0].value == datetime(2024, 1, 5)

    @pytest.mark.parametrize("name", ["due_date_from", "due_date_to"])
    def test_invalid_date_fails_fast(self, name):
        with pytest.raises(InvalidQueryParameter) as excinfo:
            build(**{name: "next tuesday"})
        assert excinfo.value.name == name
        assert excinfo.value.value == "next tuesday"

    @pytest.mark.parametrize("value", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:59:59-01:00"])
    def test_out_of_range_after_utc_conversion(self, value):
        with pytest.raises(InvalidQueryParameter) as excinfo:
            build(due_date_from=value)
        assert excinfo.value.name == "due_date_from"


class TestSearch:
    def test_search_targets_title_and_description(self):
        spec = build(search="  Documentation ")
        assert spec.search.text == "Documentation"
        assert [c.field for c in spec.search.conditions] == ["title", "description"]
        assert all(c.op == "ilike" for c in spec.search.conditions)
        assert spec.search.conditions[0].value == "%Documentation%"

    def test_wildcards_are_escaped(self):
        spec = build(search=r"50%_off\.*")
        assert spec.search.conditions[0].value == r"%50\%\_off\\.*%"


class TestSorting:
    @pytest.mark.parametrize(
        "field",
        ["id", "title", "description", "status", "priority", "due_date", "created_at", "updated_at"],
    )
    def test_allowed_fields(self, field):
        assert build(sort_by=field).sort_by == field

    @pytest.mark.parametrize("alias,field", [("_id", "id"), ("createdAt", "created_at"), ("updatedAt", "updated_at")])
    def test_legacy_aliases(self, alias, field):
        assert build(sort_by=alias).sort_by == field

    @pytest.mark.parametrize("field", ["password", "__class__", "due_date; DROP TABLE tasks", "Title"])
    def test_unknown_fields_fall_back(self, field):
        assert build(sort_by=field).sort_by == DEFAULT_SORT_FIELD

    @pytest.mark.parametrize("value", ["asc", "ASC", "Asc"])
    def test_ascending(self, value):
        assert build(sort_order=value).sort_dir is SortDirection.ASC

    @pytest.mark.parametrize("value", ["desc", "DESC", "up", "1", None])
    def test_anything_else_is_descending(self, value):
        params = {} if value is None else {"sort_order": value}
        assert build(**params).sort_dir is SortDirection.DESC


class TestPagination:
    @pytest.mark.parametrize(
        "value,expected",
        [("3", 3), (3, 3), ("0", 1), ("-4", 1), ("abc", 1), ("2.5", 2), ("7abc", 7), (" 4 ", 4)],
    )
    def test_page_floor(self, value, expected):
        assert build(page=value).page == expected

    @pytest.mark.parametrize(
        "value,expected",
        [("25", 25), ("0", 1), ("-10", 1), ("100", 100), ("101", 100), ("100000", 100), ("abc", 10), ("20.9", 20)],
    )
    def test_per_page_clamped(self, value, expected):
        assert build(per_page=value).per_page == expected

    def test_skip(self):
        spec = build(page="3", per_page="15")
        assert spec.skip == 30

    @pytest.mark.parametrize("value", ["10000000000000000000", "9" * 40, str(MAX_PAGE + 1)])
    def test_huge_page_is_capped(self, value):
        spec = build(page=value, per_page="100")
        assert spec.page == MAX_PAGE
        assert spec.skip < 2**63

    def test_huge_negative_page_is_floored(self):
        assert build(page="-" + "9" * 40).page == 1


def test_unknown_operator_rejected():
    with pytest.raises(ValueError):
        FilterCondition("title", "regex", ".*")
