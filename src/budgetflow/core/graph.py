"""
Flow graph construction for the cash-flow diagram.

One side (income or expense) of the diagram is laid out as two rows: a row of
leaf nodes, one per budget item, and a row of group ("bucket") nodes, one per
source or category, each centered above or below its leaves. Edges connect
leaves to buckets and buckets to the shared core node. Income flows toward the
core (leaf -> bucket -> core); expenses flow away from it
(core -> bucket -> leaf).

The core node itself is not produced here. Callers build each side with the
same ``core_id`` and merge the results (see :mod:`budgetflow.diagram`).
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

from .errors import ConfigError
from .kinds import K
from .utils import generate_id

if TYPE_CHECKING:
    from .aggregator import Group
    from .items import NormalizedBudgetItem

logger = logging.getLogger(__name__)

NODE_CORE_ID = "core"


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass
class GraphNode:
    """
    Positioned node of the flow diagram.

    Attributes:
        id: Node id (item id for leaves, generated for buckets)
        kind: 'leaf', 'group' or 'core'
        position: Top-level layout coordinates
        data: Kind-specific payload
        draggable: Always False for generated nodes
    """

    id: str
    kind: str
    position: Position
    data: dict[str, Any] = field(default_factory=dict)
    draggable: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind,
            "position": {"x": self.position.x, "y": self.position.y},
            "data": {_camel(key): value for key, value in self.data.items()},
            "draggable": self.draggable,
        }


@dataclass
class GraphEdge:
    """
    Directed edge of the flow diagram.

    Attributes:
        id: Edge id, ``"<source>_to_<target>"``
        source: Source node id
        target: Target node id
        kind: 'inflow', 'outflow' or 'hidden'
        animation_level: Reveal order for non-hidden edges, None for hidden ones
    """

    id: str
    source: str
    target: str
    kind: str
    animation_level: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "kind": self.kind,
        }
        if self.animation_level is not None:
            data["animationLevel"] = self.animation_level
        return data


@dataclass
class FlowGraph:
    """Node and edge lists of a diagram or of one side of it."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def extend(self, other: FlowGraph) -> None:
        self.nodes.extend(other.nodes)
        self.edges.extend(other.edges)

    def get_node(self, node_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def nodes_of_kind(self, kind: str) -> list[GraphNode]:
        return [node for node in self.nodes if node.kind == kind]

    def edge_descriptions(self) -> Counter[tuple[str, str, str]]:
        """
        Multiset of ``(source, target, kind)`` with bucket ids replaced by labels.

        Bucket ids are freshly generated on every build, so this is the form
        in which two builds from identical inputs compare equal.
        """
        labels = {
            node.id: f"group:{node.data.get('label')}"
            for node in self.nodes
            if node.kind == K.NODE_GROUP
        }
        return Counter(
            (labels.get(e.source, e.source), labels.get(e.target, e.target), e.kind)
            for e in self.edges
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }


@dataclass(frozen=True)
class FlowGraphOptions:
    """
    Layout flags for one side of the diagram.

    Attributes:
        collapse_groups: Skip the bucket level; leaves connect straight to core
        list_only: Expense side only; buckets evenly spaced and no leaves
        upstream_collapsed: The other side's buckets are collapsed, so reveal
            levels on this side move one step closer to the start
    """

    collapse_groups: bool = False
    list_only: bool = False
    upstream_collapsed: bool = False


@dataclass(frozen=True)
class LayoutConfig:
    """
    Fixed layout geometry.

    Rows are vertical offsets from the core node at y=0: incomes above,
    expenses below. Collapsed leaves sit on their side's bucket row.
    """

    spacing_x: float = 200.0
    list_extra_spacing: float = 200.0
    income_item_y: float = -400.0
    income_bucket_y: float = -200.0
    expense_bucket_y: float = 200.0
    expense_item_y: float = 400.0

    def leaf_row(self, side: str, collapsed: bool) -> float:
        if side == K.INCOME:
            return self.income_bucket_y if collapsed else self.income_item_y
        return self.expense_bucket_y if collapsed else self.expense_item_y

    def bucket_row(self, side: str) -> float:
        return self.income_bucket_y if side == K.INCOME else self.expense_bucket_y

    @property
    def list_spacing_x(self) -> float:
        return self.spacing_x + self.list_extra_spacing


def row_positions(count: int, pitch: float) -> np.ndarray:
    """
    Evenly spaced x coordinates centered on 0.

    x_i = -((count - 1) * pitch) / 2 + i * pitch
    """
    if count <= 0:
        return np.zeros(0)
    start = -((count - 1) * pitch) / 2
    return start + np.arange(count) * pitch


def animation_levels(side: str, upstream_collapsed: bool) -> tuple[int, int, int]:
    """
    Reveal levels as ``(leaf_edge, bucket_edge, collapsed_leaf_edge)``.

    Levels count edges from the income leaves through the core to the
    expense leaves, so the diagram reveals from top to bottom.
    """
    if side == K.INCOME:
        return 0, 1, 0
    depth = 1 if upstream_collapsed else 2
    return depth + 1, depth, depth


def _flow_edge(
    side: str, outer_id: str, inner_id: str, hidden: bool, level: int
) -> GraphEdge:
    # outer is the node farther from the core
    if side == K.INCOME:
        source, target, kind = outer_id, inner_id, K.EDGE_INFLOW
    else:
        source, target, kind = inner_id, outer_id, K.EDGE_OUTFLOW
    return GraphEdge(
        id=f"{source}_to_{target}",
        source=source,
        target=target,
        kind=K.EDGE_HIDDEN if hidden else kind,
        animation_level=None if hidden else level,
    )


def build_flow_graph(
    side: str,
    groups: Mapping[str, Group],
    visibility: Mapping[str, bool],
    options: FlowGraphOptions | None = None,
    *,
    core_id: str = NODE_CORE_ID,
    layout: LayoutConfig | None = None,
    ungrouped: Iterable[NormalizedBudgetItem] = (),
) -> FlowGraph:
    """
    Build the nodes and edges for one side of the cash-flow diagram.

    Leaves follow group order, then item order within each group, and are
    spaced evenly on one row centered on x=0. Each bucket is centered between
    its first and last leaf, or, in list-only mode, spaced evenly with a
    wider pitch and without leaves.

    ``ungrouped`` items become leaves after the grouped ones but belong to no
    bucket: they get an edge to the core when ``collapse_groups`` is set and
    no edge at all otherwise.

    Args:
        side: 'income' or 'expense'
        groups: Groups in display order (as produced by the aggregator)
        visibility: Group key -> all items hidden
        options: Layout flags
        core_id: Id of the shared core node, owned by the caller
        layout: Geometry override
        ungrouped: Items without a group key to place as leaves

    Returns:
        FlowGraph for this side (without the core node)

    Raises:
        ConfigError: If ``side`` is not 'income' or 'expense'
    """
    if side not in K.budget_types():
        raise ConfigError(f"Unknown flow graph side '{side}'")
    options = options or FlowGraphOptions()
    layout = layout or LayoutConfig()
    list_only = options.list_only and side == K.EXPENSE
    leaf_level, bucket_level, direct_level = animation_levels(
        side, options.upstream_collapsed
    )
    graph = FlowGraph()

    # Flatten all items, remembering each group's first/last leaf index
    leaves: list[NormalizedBudgetItem] = []
    spans: dict[str, tuple[int, int]] = {}
    for key, group in groups.items():
        if group.items:
            spans[key] = (len(leaves), len(leaves) + len(group.items) - 1)
            leaves.extend(group.items)
    leaves.extend(ungrouped)
    leaf_xs = row_positions(len(leaves), layout.spacing_x)

    if not list_only:
        leaf_y = layout.leaf_row(side, options.collapse_groups)
        for item, x in zip(leaves, leaf_xs):
            graph.nodes.append(
                GraphNode(
                    id=item.id,
                    kind=K.NODE_LEAF,
                    position=Position(float(x), leaf_y),
                    data={"item_id": item.id, "hidden": item.hidden},
                )
            )
            if options.collapse_groups:
                graph.edges.append(
                    _flow_edge(side, item.id, core_id, item.hidden, direct_level)
                )

        if options.collapse_groups:
            logger.debug(
                "Built collapsed %s graph: %d leaves", side, len(graph.nodes)
            )
            return graph

    if list_only:
        bucket_xs = row_positions(len(groups), layout.list_spacing_x)
    bucket_y = layout.bucket_row(side)
    for index, (key, group) in enumerate(groups.items()):
        if list_only:
            x = bucket_xs[index]
        elif key in spans:
            first, last = spans[key]
            x = (leaf_xs[first] + leaf_xs[last]) / 2
        else:
            continue

        bucket_id = generate_id("budget")
        graph.nodes.append(
            GraphNode(
                id=bucket_id,
                kind=K.NODE_GROUP,
                position=Position(float(x), bucket_y),
                data={"label": key, "amount": group.total, "side": side},
            )
        )
        graph.edges.append(
            _flow_edge(
                side, bucket_id, core_id, bool(visibility.get(key)), bucket_level
            )
        )
        if list_only:
            continue
        for item in group.items:
            graph.edges.append(
                _flow_edge(side, item.id, bucket_id, item.hidden, leaf_level)
            )

    logger.debug(
        "Built %s graph: %d nodes, %d edges (list_only=%s)",
        side,
        len(graph.nodes),
        len(graph.edges),
        list_only,
    )
    return graph


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)
