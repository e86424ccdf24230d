"""
Tests for summary analytics tables.
"""

import math

import pandas as pd
import pytest
from budgetflow import Cadence, Expense, Income, build_budget_view
from budgetflow.summary import (
    GROUP_COLUMNS,
    ITEM_COLUMNS,
    budget_summary,
    group_summary,
    items_frame,
)


class TestSummary:
    """Test pandas summary helpers."""

    @pytest.fixture
    def view(self):
        incomes = [
            Income(id="salary", label="Salary", amount=3000, source="Job"),
            Income(id="side", label="Side", amount=100, cadence=Cadence("week", 1),
                   source="Gig", hidden=True),
        ]
        expenses = [
            Expense(id="rent", label="Rent", amount=1200, category="Housing"),
            Expense(id="power", label="Power", amount=100, category="Housing",
                    hidden=True),
            Expense(id="food", label="Food", amount=600, category="Food"),
        ]
        return build_budget_view(incomes, expenses)

    def test_items_frame(self, view):
        frame = items_frame(view.expenses)
        assert list(frame.columns) == ITEM_COLUMNS
        assert list(frame["id"]) == ["rent", "food", "power"]
        assert list(frame["group"]) == ["Housing", "Food", "Housing"]
        assert frame["hidden"].tolist() == [False, False, True]
        assert frame.loc[0, "cadence_type"] == "month"

    def test_items_frame_keeps_original_amount(self, view):
        frame = items_frame(view.incomes)
        side = frame.set_index("id").loc["side"]
        assert side["original_amount"] == 100
        assert side["amount"] == pytest.approx(100 * 30 / 7)

    def test_group_summary(self, view):
        frame = group_summary(view.expense_by_category, view.expense_category_hidden)
        assert list(frame.columns) == GROUP_COLUMNS
        assert list(frame.index) == ["Housing", "Food"]

        housing = frame.loc["Housing"]
        assert housing["total"] == 1200
        assert housing["complete_total"] == 1300
        assert housing["hidden_total"] == 100
        assert housing["item_count"] == 2
        assert not housing["all_hidden"]
        assert frame["share"].sum() == pytest.approx(1.0)
        assert housing["share"] == pytest.approx(1200 / 1800)

    def test_group_summary_all_hidden(self, view):
        frame = group_summary(view.income_by_source, view.income_source_hidden)
        assert bool(frame.loc["Gig", "all_hidden"]) is True
        assert frame.loc["Gig", "share"] == 0.0

    def test_group_summary_empty(self):
        frame = group_summary({}, {})
        assert frame.empty
        assert isinstance(frame, pd.DataFrame)

    def test_budget_summary(self, view):
        summary = budget_summary(view)
        assert summary["incomes_total"] == 3000
        assert summary["expenses_total"] == 1800
        assert summary["net"] == 1200
        assert summary["savings_rate"] == pytest.approx(0.4)
        assert summary["window"] == "every month"
        assert summary["income_groups"] == 2

    def test_savings_rate_nan_without_income(self):
        summary = budget_summary(build_budget_view([], [Expense(id="e", amount=5)]))
        assert math.isnan(summary["savings_rate"])
        assert summary["net"] == -5
