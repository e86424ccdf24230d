"""
Property-based tests using Hypothesis for normalization, grouping and layout.

These tests are skipped if Hypothesis is not installed.
Run `pip install hypothesis` to enable them.
"""

import pytest

hypothesis = pytest.importorskip(
    "hypothesis", reason="Hypothesis not installed - run 'pip install hypothesis'"
)

from hypothesis import given  # noqa: E402
from hypothesis import strategies as st  # noqa: E402

from budgetflow.core.aggregator import aggregate  # noqa: E402
from budgetflow.core.cadence import Cadence, normalize_amount  # noqa: E402
from budgetflow.core.graph import build_flow_graph, row_positions  # noqa: E402
from budgetflow.core.items import Income  # noqa: E402

cadence_strategy = st.builds(
    Cadence,
    type=st.sampled_from(["day", "week", "month", "year"]),
    interval=st.integers(min_value=1, max_value=24),
)

amount_strategy = st.floats(
    min_value=1.0, max_value=1_000_000.0, allow_infinity=False, allow_nan=False
).map(lambda x: round(x, 2))


# Narrow ranges keep hidden amounts well above float rounding of group sums
narrow_cadence_strategy = st.builds(
    Cadence,
    type=st.sampled_from(["week", "month"]),
    interval=st.integers(min_value=1, max_value=4),
)
narrow_amount_strategy = st.floats(min_value=1.0, max_value=10_000.0).map(
    lambda x: round(x, 2)
)


@st.composite
def income_lists(draw, amounts=amount_strategy, cadences=cadence_strategy):
    count = draw(st.integers(min_value=1, max_value=12))
    return [
        Income(
            id=f"i{idx}",
            amount=draw(amounts),
            cadence=draw(cadences),
            source=draw(st.sampled_from(["Job", "Gig", "Rent", "Dividends"])),
            hidden=draw(st.booleans()),
        )
        for idx in range(count)
    ]


class TestNormalizationProperties:
    @given(amount=amount_strategy, cadence=cadence_strategy, window=cadence_strategy)
    def test_linear_in_amount(self, amount, cadence, window):
        assert normalize_amount(2 * amount, cadence, window) == 2 * normalize_amount(
            amount, cadence, window
        )

    @given(amount=amount_strategy, cadence=cadence_strategy)
    def test_identity_for_matching_window(self, amount, cadence):
        assert normalize_amount(amount, cadence, cadence) == amount

    @given(cadence=cadence_strategy, window=cadence_strategy)
    def test_zero_stays_zero(self, cadence, window):
        assert normalize_amount(0.0, cadence, window) == 0.0


class TestGroupingProperties:
    @given(
        items=income_lists(narrow_amount_strategy, narrow_cadence_strategy),
        window=narrow_cadence_strategy,
    )
    def test_total_bounded_by_complete_total(self, items, window):
        result = aggregate(items, window, lambda item: item.source)
        for group in result.groups.values():
            assert group.total <= group.complete_total
            if any(item.hidden for item in group.items):
                assert group.total < group.complete_total
            else:
                assert group.total == group.complete_total

    @given(items=income_lists(), window=cadence_strategy)
    def test_groups_sorted_by_complete_total(self, items, window):
        result = aggregate(items, window, lambda item: item.source)
        totals = [group.complete_total for group in result.groups.values()]
        assert totals == sorted(totals, reverse=True)

    @given(items=income_lists(), window=cadence_strategy)
    def test_visibility_matches_members(self, items, window):
        result = aggregate(items, window, lambda item: item.source)
        for key, group in result.groups.items():
            expected = bool(group.items) and all(i.hidden for i in group.items)
            assert result.visibility[key] is expected

    @given(items=income_lists(), window=cadence_strategy)
    def test_normalized_items_sorted(self, items, window):
        result = aggregate(items, window, lambda item: item.source)
        amounts = [n.amount for n in result.normalized_items]
        assert amounts == sorted(amounts, reverse=True)


class TestLayoutProperties:
    @given(count=st.integers(min_value=1, max_value=60))
    def test_leaf_row_symmetric(self, count):
        xs = row_positions(count, 200.0)
        for left, right in zip(xs, reversed(xs)):
            assert left == pytest.approx(-right)
        if count == 1:
            assert xs[0] == 0.0

    @given(items=income_lists(), window=cadence_strategy)
    def test_rebuild_is_stable(self, items, window):
        result = aggregate(items, window, lambda item: item.source)
        first = build_flow_graph("income", result.groups, result.visibility)
        second = build_flow_graph("income", result.groups, result.visibility)

        assert [n.position for n in first.nodes] == [n.position for n in second.nodes]
        assert first.edge_descriptions() == second.edge_descriptions()

    @given(items=income_lists(), window=cadence_strategy)
    def test_hidden_edges_carry_no_level(self, items, window):
        result = aggregate(items, window, lambda item: item.source)
        graph = build_flow_graph("income", result.groups, result.visibility)
        for edge in graph.edges:
            assert (edge.kind == "hidden") == (edge.animation_level is None)
