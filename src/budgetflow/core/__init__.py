"""
Core module for BudgetFlow.

This module contains the aggregation-and-layout engine: cadence normalization,
grouping with hidden-item semantics, item lookup and the flow graph builder.
"""

from .aggregator import (
    BASE_EXPENSE_CATEGORIES,
    BASE_INCOME_TYPES,
    Aggregation,
    BudgetView,
    Group,
    GroupVisibility,
    aggregate,
    build_budget_view,
    group_items,
    group_visibility,
    normalize_items,
    visible_total,
)
from .cadence import (
    DEFAULT_TIME_WINDOW,
    PERIOD_DAYS,
    Cadence,
    TimeWindow,
    cadence_days,
    normalize_amount,
)
from .errors import ConfigError, SpaceFormatError
from .graph import (
    NODE_CORE_ID,
    FlowGraph,
    FlowGraphOptions,
    GraphEdge,
    GraphNode,
    LayoutConfig,
    Position,
    animation_levels,
    build_flow_graph,
    row_positions,
)
from .items import (
    BudgetItem,
    Expense,
    Income,
    NormalizedBudgetItem,
    budget_item_from_dict,
)
from .kinds import K
from .lookup import ItemLookup, LookupResult
from .space import Space, SpaceConfig, create_space, duplicate_space, load_space

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
    "PERIOD_DAYS",
    "cadence_days",
    "normalize_amount",
    # Items
    "BudgetItem",
    "Income",
    "Expense",
    "NormalizedBudgetItem",
    "budget_item_from_dict",
    # Aggregation
    "Aggregation",
    "BudgetView",
    "Group",
    "GroupVisibility",
    "BASE_INCOME_TYPES",
    "BASE_EXPENSE_CATEGORIES",
    "aggregate",
    "build_budget_view",
    "group_items",
    "group_visibility",
    "normalize_items",
    "visible_total",
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
    "animation_levels",
    "build_flow_graph",
    "row_positions",
    # Space
    "Space",
    "SpaceConfig",
    "create_space",
    "duplicate_space",
    "load_space",
]
