"""
Tests for full diagram assembly around the shared core node.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from budgetflow import (
    BudgetView,
    DiagramOptions,
    Expense,
    Income,
    K,
    build_budget_view,
    build_cash_flow_diagram,
    load_space,
)

SPACE_PATH = Path(__file__).resolve().parent / "data" / "household.yaml"


@pytest.fixture
def view() -> BudgetView:
    return BudgetView.from_space(load_space(SPACE_PATH))


def test_single_core_node(view):
    graph = build_cash_flow_diagram(view)
    cores = graph.nodes_of_kind("core")
    assert len(cores) == 1
    core = cores[0]
    assert core.id == "core"
    assert (core.position.x, core.position.y) == (0.0, 0.0)
    assert core.data["incomes_total"] == pytest.approx(view.incomes_total)
    assert core.data["net"] == pytest.approx(view.net)


def test_default_diagram_counts(view):
    graph = build_cash_flow_diagram(view)
    # 1 core + 3 income leaves + 3 sources + 3 expense leaves + 3 categories
    assert len(graph.nodes) == 13
    # each leaf and each bucket has exactly one edge
    assert len(graph.edges) == 12
    node_ids = {n.id for n in graph.nodes}
    for edge in graph.edges:
        assert edge.source in node_ids
        assert edge.target in node_ids


def test_reveal_order_runs_top_to_bottom(view):
    graph = build_cash_flow_diagram(view)
    levels = sorted(
        {e.animation_level for e in graph.edges if e.animation_level is not None}
    )
    assert levels == [0, 1, 2, 3]
    hidden = [e for e in graph.edges if e.kind == "hidden"]
    # lottery + Luck source, insurance + Transportation category
    assert len(hidden) == 4


def test_hide_sources_shifts_expense_levels(view):
    graph = build_cash_flow_diagram(view, DiagramOptions(hide_sources=True))
    income_edges = [e for e in graph.edges if e.target == "core"]
    assert {e.source for e in income_edges} == {"salary", "tutoring", "lottery"}

    expense_levels = {
        e.animation_level
        for e in graph.edges
        if e.kind == "outflow"
    }
    assert expense_levels == {1, 2}


def test_hide_categories(view):
    graph = build_cash_flow_diagram(view, DiagramOptions(hide_categories=True))
    expense_groups = [
        n for n in graph.nodes_of_kind("group") if n.data["side"] == "expense"
    ]
    assert expense_groups == []
    rent_edge = next(e for e in graph.edges if e.target == "rent")
    assert rent_edge.source == "core"
    assert rent_edge.animation_level == 2


def test_list_expenses(view):
    graph = build_cash_flow_diagram(view, DiagramOptions(list_expenses=True))
    expense_leaves = [n for n in graph.nodes_of_kind("leaf") if n.position.y > 0]
    assert expense_leaves == []
    expense_groups = [
        n for n in graph.nodes_of_kind("group") if n.data["side"] == "expense"
    ]
    assert [n.position.x for n in expense_groups] == [-400.0, 0.0, 400.0]


def test_incomes_above_expenses_below(view):
    graph = build_cash_flow_diagram(view)
    for node in graph.nodes_of_kind("leaf"):
        kind = view.get_item(node.id).kind
        assert (node.position.y < 0) == (kind == "income")


def test_empty_view():
    graph = build_cash_flow_diagram(build_budget_view([], []))
    assert [n.kind for n in graph.nodes] == ["core"]
    assert graph.edges == []


def test_custom_core_id():
    view = build_budget_view(
        [Income(id="i1", amount=1000, source="Job")],
        [Expense(id="e1", amount=10, category="Food")],
    )
    graph = build_cash_flow_diagram(view, core_id="hub")
    assert graph.get_node("hub").kind == "core"
    assert {e.source for e in graph.edges if e.kind == "outflow"} >= {"hub"}


def test_to_dict_is_serializable(view):
    import json

    payload = build_cash_flow_diagram(view).to_dict()
    text = json.dumps(payload)
    assert '"incomesTotal"' in text
    assert set(payload) == {"nodes", "edges"}


def test_node_and_edge_kinds_are_known(view):
    graph = build_cash_flow_diagram(view, DiagramOptions(hide_sources=True))
    assert {n.kind for n in graph.nodes} <= set(K.node_kinds())
    assert {e.kind for e in graph.edges} <= set(K.edge_kinds())
    assert set(K.edge_kinds()) == {"inflow", "outflow", "hidden"}


def test_income_without_source_links_to_core_when_collapsed():
    view = build_budget_view(
        [
            Income(id="job", amount=100, source="Job"),
            Income(id="loose", amount=50),
        ],
        [],
    )
    graph = build_cash_flow_diagram(view, DiagramOptions(hide_sources=True))

    loose = graph.get_node("loose")
    assert loose is not None
    assert loose.kind == "leaf"
    assert loose.position.y == -200.0
    edges = {e.id: e for e in graph.edges}
    assert set(edges) == {"job_to_core", "loose_to_core"}
    assert edges["loose_to_core"].kind == "inflow"
    assert edges["loose_to_core"].animation_level == 0
    assert graph.get_node("core").data["incomes_total"] == 150.0


def test_expense_without_category_is_unconnected_leaf():
    view = build_budget_view(
        [],
        [
            Expense(id="rent", amount=1000, category="Housing"),
            Expense(id="misc", amount=20),
        ],
    )
    graph = build_cash_flow_diagram(view)

    misc = graph.get_node("misc")
    assert misc is not None
    assert misc.position.y == 400.0
    assert not [e for e in graph.edges if "misc" in (e.source, e.target)]
    assert len(graph.nodes_of_kind("group")) == 1
