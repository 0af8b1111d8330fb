"""
Tests for the partial-update builder and the WHERE-clause accumulator.
"""

import pytest

from equity_coffee.core.sql import QueryParams, build_assignments

ALLOWED = ("lot_name", "country", "cup_score", "status")


@pytest.mark.unit
class TestBuildAssignments:
    def test_present_columns_in_allow_list_order(self):
        result = build_assignments({"status": "hidden", "lot_name": "Finca"}, ALLOWED, start=2)

        assert result.sql == "lot_name = $2, status = $3"
        assert result.params == ["Finca", "hidden"]
        assert result.next_index == 4
        assert not result.is_empty

    def test_absent_columns_are_skipped(self):
        result = build_assignments({"country": "Peru"}, ALLOWED)

        assert result.sql == "country = $1"
        assert result.params == ["Peru"]

    def test_explicit_none_is_a_value(self):
        result = build_assignments({"cup_score": None}, ALLOWED)

        assert result.sql == "cup_score = $1"
        assert result.params == [None]

    def test_unknown_keys_never_reach_sql(self):
        result = build_assignments({"farmer_id = farmer_id; --": "x", "id": 1}, ALLOWED)

        assert result.is_empty
        assert result.sql == ""
        assert result.params == []

    def test_empty_changes_is_empty(self):
        result = build_assignments({}, ALLOWED, start=2)

        assert result.is_empty
        assert result.next_index == 2

    def test_values_are_never_interpolated(self):
        payload = "'; DROP TABLE coffee_lots; --"
        result = build_assignments({"lot_name": payload}, ALLOWED)

        assert payload not in result.sql
        assert result.params == [payload]


@pytest.mark.unit
class TestQueryParams:
    def test_no_conditions(self):
        qp = QueryParams()

        assert qp.where_sql() == ""
        assert qp.values == []

    def test_conditions_get_sequential_placeholders(self):
        qp = QueryParams()
        qp.where("status = {}", "published")
        qp.where("(price_per_kg IS NULL OR price_per_kg <= {})", 9)

        assert qp.where_sql() == "WHERE status = $1 AND (price_per_kg IS NULL OR price_per_kg <= $2)"
        assert qp.values == ["published", 9]

    def test_bind_continues_numbering(self):
        qp = QueryParams()
        qp.where("country = {}", "Kenya")

        assert qp.bind(50) == "$2"
        assert qp.values == ["Kenya", 50]
