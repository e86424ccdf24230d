"""
Tests for the id-based item lookup.
"""

from budgetflow.core.aggregator import build_budget_view
from budgetflow.core.items import Expense, Income
from budgetflow.core.lookup import ItemLookup, LookupResult


def _view():
    return build_budget_view(
        [Income(id="i1", amount=1000, source="Job")],
        [Expense(id="e1", amount=400, category="Housing")],
    )


def test_lookup_income():
    result = _view().get_item("i1")
    assert result.kind == "income"
    assert result.item.id == "i1"
    assert result.item.amount == 1000


def test_lookup_expense():
    result = _view().get_item("e1")
    assert result.kind == "expense"
    assert result.item.item.category == "Housing"


def test_lookup_miss_returns_none_variant():
    result = _view().get_item("missing")
    assert result == LookupResult(None, "none")
    assert result.item is None


def test_income_wins_on_duplicate_id():
    view = build_budget_view(
        [Income(id="x", amount=1, source="A")],
        [Expense(id="x", amount=2, category="B")],
    )
    assert view.get_item("x").kind == "income"


def test_maps_are_copies():
    lookup = ItemLookup.from_items([], [])
    lookup.incomes["injected"] = None
    assert "injected" not in lookup
    assert len(lookup) == 0


def test_view_maps_expose_normalized_items():
    view = _view()
    assert set(view.incomes_map) == {"i1"}
    assert set(view.expenses_map) == {"e1"}
    assert "i1" in view.lookup
