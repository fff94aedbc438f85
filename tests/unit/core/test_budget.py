"""
Tests pour les paliers et fourchettes de budget.
"""

import math

import pytest

from vitrine.core.value_objects.budget import (
    BUDGET_LEVELS,
    BudgetRange,
    coerce_budget_level,
    parse_budget_range,
    resolve_visitor_budget,
)


class TestParseBudgetRange:
    """Tests pour parse_budget_range."""

    def test_two_numbers_with_thousand_separators(self):
        assert parse_budget_range("10 000 à 15 000$") == BudgetRange(10000, 15000)

    def test_single_number_sets_both_bounds(self):
        assert parse_budget_range("5000$") == BudgetRange(5000, 5000)

    def test_no_digits(self):
        assert parse_budget_range("aucun") == BudgetRange(None, None)
        assert parse_budget_range("") == BudgetRange(None, None)
        assert parse_budget_range(None) == BudgetRange(None, None)

    def test_extra_numbers_ignored(self):
        assert parse_budget_range("2000 - 3000 (ou 4000)") == BudgetRange(2000, 3000)


class TestCoerceBudgetLevel:
    """Tests pour coerce_budget_level."""

    def test_nearest_level(self):
        assert coerce_budget_level(12000) == 10000
        assert coerce_budget_level(14000) == 15000
        assert coerce_budget_level(100000) == 50000
        assert coerce_budget_level(1) == 2000

    def test_exact_midpoint_prefers_lower_level(self):
        """A egale distance de 10000 et 15000, le palier inferieur l'emporte."""
        assert coerce_budget_level(12500) == 10000
        assert coerce_budget_level(7500) == 5000

    def test_exact_levels_unchanged(self):
        for level in BUDGET_LEVELS:
            assert coerce_budget_level(level) == level

    @pytest.mark.parametrize("value", [None, math.nan, math.inf, -math.inf, 0, -500])
    def test_invalid_values(self, value):
        assert coerce_budget_level(value) is None


class TestBudgetRangeOverlap:
    """Tests pour BudgetRange.overlaps."""

    def test_level_inside_range(self):
        video = BudgetRange(10000, 20000)
        assert video.overlaps(BudgetRange(15000, 15000))

    def test_level_outside_range(self):
        video = BudgetRange(10000, 20000)
        assert not video.overlaps(BudgetRange(25000, 25000))

    def test_bounds_inclusive(self):
        assert BudgetRange(10000, 20000).overlaps(BudgetRange(20000, None))

    def test_none_bound_unbounded(self):
        assert BudgetRange(None, 5000).overlaps(BudgetRange(2000, 2000))
        assert BudgetRange(30000, None).overlaps(BudgetRange(50000, 50000))
        assert BudgetRange().overlaps(BudgetRange(2000, 5000))
        assert not BudgetRange(30000, None).overlaps(BudgetRange(2000, 5000))


class TestResolveVisitorBudget:
    """Tests pour resolve_visitor_budget."""

    def test_bracket_keys(self):
        assert resolve_visitor_budget("2000-5000") == BudgetRange(2000, 5000)
        assert resolve_visitor_budget("20000+") == BudgetRange(20000, None)

    def test_level_as_number_or_string(self):
        assert resolve_visitor_budget(15000) == BudgetRange(15000, 15000)
        assert resolve_visitor_budget("25000") == BudgetRange(25000, 25000)

    def test_no_filter_values(self):
        for value in (None, "", "unknown", "beaucoup", True):
            assert resolve_visitor_budget(value) is None
