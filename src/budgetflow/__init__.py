"""
BudgetFlow - Recurring Budget Aggregation and Cash-Flow Diagram Engine

BudgetFlow takes a budget's recurring incomes and expenses, each with its own
repetition cadence, and turns them into comparable, grouped views and a
positioned node/edge graph ready to be drawn as a cash-flow diagram.

Key Features:
- **Cadence Normalization**: Weekly, monthly and yearly amounts expressed per one time window
- **Grouping**: Incomes by source, expenses by category, largest first
- **Hidden Items**: Hidden items stay listed but drop out of visible totals and diagram flows
- **Flow Graph Layout**: Deterministic two-level layout around a single core node
- **Collapse Modes**: Hide sources, hide categories, or list categories only
- **Pure Functions**: Every call returns fresh values; inputs are never mutated

Architecture Overview:
- **Cadence**: Value type for repetition periods and time windows
- **Income / Expense**: Budget items stored in their own cadence
- **Aggregator**: Normalized items, groups with visible/complete totals, hidden maps
- **ItemLookup**: Id-based access to any item plus its type tag
- **Flow Graph Builder**: Leaf, group and core nodes with inflow/outflow/hidden edges
- **Summary**: pandas tables and headline totals

Quick Start:
    ```python
    from budgetflow import (
        Cadence,
        Expense,
        Income,
        build_budget_view,
        build_cash_flow_diagram,
    )

    incomes = [Income(id="salary", amount=2400, cadence=Cadence("week", 2), source="Job")]
    expenses = [Expense(id="rent", amount=1800, category="Housing")]

    view = build_budget_view(incomes, expenses, Cadence("month", 1))
    view.incomes_total  # 5142.857...

    graph = build_cash_flow_diagram(view)
    payload = graph.to_dict()  # {"nodes": [...], "edges": [...]}
    ```
"""

# Version information
__version__ = "0.1.0"
__author__ = "BudgetFlow Team"
__description__ = "Recurring budget aggregation and cash-flow diagram engine"

from .core import (
    BASE_EXPENSE_CATEGORIES,
    BASE_INCOME_TYPES,
    DEFAULT_TIME_WINDOW,
    NODE_CORE_ID,
    Aggregation,
    BudgetItem,
    BudgetView,
    Cadence,
    ConfigError,
    Expense,
    FlowGraph,
    FlowGraphOptions,
    GraphEdge,
    GraphNode,
    Group,
    Income,
    ItemLookup,
    K,
    LayoutConfig,
    LookupResult,
    NormalizedBudgetItem,
    Position,
    Space,
    SpaceConfig,
    SpaceFormatError,
    TimeWindow,
    aggregate,
    build_budget_view,
    build_flow_graph,
    create_space,
    duplicate_space,
    load_space,
    normalize_amount,
)
from .diagram import DiagramOptions, build_cash_flow_diagram
from .summary import budget_summary, group_summary, items_frame

# Define what gets imported with "from budgetflow import *"
__all__ = [
    # Errors
    "ConfigError",
    "SpaceFormatError",
    # Kinds
    "K",
    # Cadence
    "Cadence",
    "TimeWindow",
    "DEFAULT_TIME_WINDOW",
    "normalize_amount",
    # Items
    "BudgetItem",
    "Income",
    "Expense",
    "NormalizedBudgetItem",
    # Aggregation
    "Aggregation",
    "BudgetView",
    "Group",
    "BASE_INCOME_TYPES",
    "BASE_EXPENSE_CATEGORIES",
    "aggregate",
    "build_budget_view",
    # Lookup
    "ItemLookup",
    "LookupResult",
    # Graph
    "NODE_CORE_ID",
    "FlowGraph",
    "FlowGraphOptions",
    "GraphEdge",
    "GraphNode",
    "LayoutConfig",
    "Position",
    "build_flow_graph",
    # Diagram
    "DiagramOptions",
    "build_cash_flow_diagram",
    # Space
    "Space",
    "SpaceConfig",
    "create_space",
    "duplicate_space",
    "load_space",
    # Summary
    "items_frame",
    "group_summary",
    "budget_summary",
    # Version info
    "__version__",
    "__author__",
    "__description__",
]
