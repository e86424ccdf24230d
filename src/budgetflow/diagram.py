"""
Cash-flow diagram assembly.

Builds the income and expense sides of the flow graph and joins them at a
single core node, which is the only node this module creates itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from budgetflow.core.aggregator import BudgetView
from budgetflow.core.graph import (
    NODE_CORE_ID,
    FlowGraph,
    FlowGraphOptions,
    GraphNode,
    LayoutConfig,
    Position,
    build_flow_graph,
)
from budgetflow.core.kinds import K

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiagramOptions:
    """
    Diagram-wide collapse modes.

    Attributes:
        hide_sources: Collapse income sources (income leaves connect to core)
        hide_categories: Collapse expense categories (expense leaves hang off core)
        list_expenses: Show only evenly spaced expense categories, no expense leaves
    """

    hide_sources: bool = False
    hide_categories: bool = False
    list_expenses: bool = False

    def income_options(self) -> FlowGraphOptions:
        return FlowGraphOptions(collapse_groups=self.hide_sources)

    def expense_options(self) -> FlowGraphOptions:
        return FlowGraphOptions(
            collapse_groups=self.hide_categories,
            list_only=self.list_expenses,
            upstream_collapsed=self.hide_sources,
        )


def core_node(view: BudgetView, core_id: str = NODE_CORE_ID) -> GraphNode:
    """The budget center node, placed at the origin."""
    return GraphNode(
        id=core_id,
        kind=K.NODE_CORE,
        position=Position(0.0, 0.0),
        data={
            "incomes_total": view.incomes_total,
            "expenses_total": view.expenses_total,
            "net": view.net,
        },
    )


def build_cash_flow_diagram(
    view: BudgetView,
    options: DiagramOptions | None = None,
    *,
    layout: LayoutConfig | None = None,
    core_id: str = NODE_CORE_ID,
) -> FlowGraph:
    """
    Build the full diagram: core node, income side, expense side.

    Args:
        view: Aggregated budget view
        options: Collapse modes
        layout: Geometry override
        core_id: Id for the shared core node

    Returns:
        FlowGraph with every node and edge of the diagram

    Example:
        ```python
        from budgetflow import build_budget_view, build_cash_flow_diagram
        from budgetflow.core.items import Income

        view = build_budget_view([Income(id="i1", amount=1000, source="Job")], [])
        graph = build_cash_flow_diagram(view)
        len(graph.nodes)  # 3: core, leaf, bucket
        ```
    """
    options = options or DiagramOptions()
    graph = FlowGraph(nodes=[core_node(view, core_id)])
    graph.extend(
        build_flow_graph(
            K.INCOME,
            view.income_by_source,
            view.income_source_hidden,
            options.income_options(),
            core_id=core_id,
            layout=layout,
            ungrouped=[n for n in view.incomes if not n.group_key],
        )
    )
    graph.extend(
        build_flow_graph(
            K.EXPENSE,
            view.expense_by_category,
            view.expense_category_hidden,
            options.expense_options(),
            core_id=core_id,
            layout=layout,
            ungrouped=[n for n in view.expenses if not n.group_key],
        )
    )
    logger.debug(
        "Diagram built: %d nodes, %d edges", len(graph.nodes), len(graph.edges)
    )
    return graph
