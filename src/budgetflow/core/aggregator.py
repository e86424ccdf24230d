"""
Budget aggregation for BudgetFlow.

Turns raw income/expense collections into the normalized, grouped and
visibility-aware views consumed by lists, summaries and the flow graph builder.
Every function here is a pure computation: inputs are never mutated and each
call returns fresh structures.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .cadence import DEFAULT_TIME_WINDOW, Cadence, TimeWindow, normalize_amount
from .items import BudgetItem, Expense, Income, NormalizedBudgetItem
from .lookup import ItemLookup, LookupResult

if TYPE_CHECKING:
    from .space import Space

logger = logging.getLogger(__name__)

GroupVisibility = dict[str, bool]

# Always offered in pickers, merged with the values found in the Space
BASE_INCOME_TYPES: tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Business",
    "Investment",
    "Rental",
    "Benefits",
    "Other",
)
BASE_EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Housing",
    "Utilities",
    "Food",
    "Transportation",
    "Insurance",
    "Healthcare",
    "Debt",
    "Savings",
    "Entertainment",
    "Subscriptions",
    "Personal",
    "Other",
)


@dataclass
class Group:
    """
    Items sharing a source (income) or category (expense).

    Attributes:
        key: The shared source/category
        total: Sum of normalized amounts of non-hidden items
        complete_total: Sum of normalized amounts of all items
        items: Member items in normalized-amount order
    """

    key: str
    total: float = 0.0
    complete_total: float = 0.0
    items: list[NormalizedBudgetItem] = field(default_factory=list)

    @property
    def hidden_total(self) -> float:
        return self.complete_total - self.total


@dataclass
class Aggregation:
    """Result of :func:`aggregate` for one item collection."""

    normalized_items: list[NormalizedBudgetItem]
    groups: dict[str, Group]
    visibility: GroupVisibility


def normalize_items(
    items: Iterable[BudgetItem], window: TimeWindow
) -> list[NormalizedBudgetItem]:
    """
    Normalize every item against ``window``, largest amount first.

    The sort is stable, so items with equal normalized amounts keep their
    stored order. Absent amounts count as 0 and absent cadences as monthly.
    """
    normalized = []
    for item in items:
        original = item.amount or 0.0
        cadence = Cadence.coerce(item.cadence)
        normalized.append(
            NormalizedBudgetItem(
                item=item,
                amount=normalize_amount(original, cadence, window),
                original_amount=original,
            )
        )
    normalized.sort(key=lambda n: n.amount, reverse=True)
    return normalized


def group_items(
    normalized_items: Iterable[NormalizedBudgetItem],
    group_key_of: Callable[[BudgetItem], str | None],
) -> dict[str, Group]:
    """
    Fold normalized items into groups, ordered by complete total descending.

    Items whose key is None or empty are left out. Groups with equal complete
    totals keep the order in which they were first encountered.
    """
    groups: dict[str, Group] = {}
    for normalized in normalized_items:
        key = group_key_of(normalized.item)
        if not key:
            continue
        group = groups.get(key)
        if group is None:
            group = groups[key] = Group(key=key)
        group.items.append(normalized)
        group.complete_total += normalized.amount
        if not normalized.hidden:
            group.total += normalized.amount

    ordered = sorted(groups.values(), key=lambda g: g.complete_total, reverse=True)
    return {group.key: group for group in ordered}


def group_visibility(groups: dict[str, Group]) -> GroupVisibility:
    """Map each group key to True iff the group is non-empty and fully hidden."""
    return {
        key: len(group.items) > 0 and all(item.hidden for item in group.items)
        for key, group in groups.items()
    }


def aggregate(
    items: Iterable[BudgetItem],
    window: TimeWindow,
    group_key_of: Callable[[BudgetItem], str | None],
) -> Aggregation:
    """
    Normalize, group and compute visibility for one item collection.

    Args:
        items: Raw budget items (never mutated)
        window: Time window all amounts are expressed in
        group_key_of: Returns the grouping key of an item, or None to skip grouping

    Returns:
        Aggregation with the sorted normalized items, the sorted groups and
        the per-group hidden map

    Example:
        ```python
        from budgetflow.core.aggregator import aggregate
        from budgetflow.core.cadence import Cadence
        from budgetflow.core.items import Income

        job = Income(id="i1", amount=1000, source="Job")
        result = aggregate([job], Cadence("month", 1), lambda i: i.source)
        result.groups["Job"].total  # 1000.0
        ```
    """
    normalized = normalize_items(items, window)
    groups = group_items(normalized, group_key_of)
    visibility = group_visibility(groups)
    logger.debug(
        "Aggregated %d items into %d groups (window=%s)",
        len(normalized),
        len(groups),
        window,
    )
    return Aggregation(normalized_items=normalized, groups=groups, visibility=visibility)


def visible_total(normalized_items: Iterable[NormalizedBudgetItem]) -> float:
    """Sum of normalized amounts over non-hidden items."""
    total = 0.0
    for item in normalized_items:
        if not item.hidden:
            total += item.amount
    return total


def _source_of(item: BudgetItem) -> str | None:
    return getattr(item, "source", None)


def _category_of(item: BudgetItem) -> str | None:
    return getattr(item, "category", None)


@dataclass
class BudgetView:
    """
    Normalized, grouped view over both sides of a Space.

    Build it with :func:`build_budget_view` or :meth:`from_space`. It holds
    derived data only; rebuild it whenever the items or the window change.

    Attributes:
        window: Time window the amounts are expressed in
        incomes: Normalized incomes, largest first
        expenses: Normalized expenses, largest first
        income_by_source: Income groups keyed by source
        expense_by_category: Expense groups keyed by category
        income_source_hidden: Source -> all items hidden
        expense_category_hidden: Category -> all items hidden
        incomes_total: Visible income total
        expenses_total: Visible expense total
    """

    window: TimeWindow
    incomes: list[NormalizedBudgetItem]
    expenses: list[NormalizedBudgetItem]
    income_by_source: dict[str, Group]
    expense_by_category: dict[str, Group]
    income_source_hidden: GroupVisibility
    expense_category_hidden: GroupVisibility
    incomes_total: float
    expenses_total: float
    lookup: ItemLookup

    @classmethod
    def from_space(cls, space: Space) -> BudgetView:
        return build_budget_view(
            space.incomes, space.expenses, space.config.time_window
        )

    @property
    def incomes_map(self) -> dict[str, NormalizedBudgetItem]:
        return self.lookup.incomes

    @property
    def expenses_map(self) -> dict[str, NormalizedBudgetItem]:
        return self.lookup.expenses

    @property
    def net(self) -> float:
        return self.incomes_total - self.expenses_total

    def get_item(self, item_id: str) -> LookupResult:
        """Look up a normalized item and its type tag by id."""
        return self.lookup.lookup(item_id)

    @property
    def income_sources(self) -> list[str]:
        """Distinct income sources, most used first."""
        counts: dict[str, int] = {}
        for income in self.incomes:
            source = _source_of(income.item)
            if source:
                counts[source] = counts.get(source, 0) + 1
        return sorted(counts, key=lambda s: counts[s], reverse=True)

    @property
    def expense_sub_categories(self) -> dict[str, list[str]]:
        """Category -> distinct sub-categories in encounter order."""
        out: dict[str, list[str]] = {}
        for expense in self.expenses:
            category = _category_of(expense.item)
            sub_category = getattr(expense.item, "sub_category", None)
            if category and sub_category:
                subs = out.setdefault(category, [])
                if sub_category not in subs:
                    subs.append(sub_category)
        return out

    @property
    def income_types(self) -> list[str]:
        types = set(BASE_INCOME_TYPES)
        types.update(
            income.item.type
            for income in self.incomes
            if getattr(income.item, "type", None)
        )
        return sorted(types)

    @property
    def expense_categories(self) -> list[str]:
        categories = set(BASE_EXPENSE_CATEGORIES)
        categories.update(
            category
            for category in (_category_of(e.item) for e in self.expenses)
            if category
        )
        return sorted(categories)


def build_budget_view(
    incomes: Sequence[Income] | None,
    expenses: Sequence[Expense] | None,
    window: TimeWindow | None = None,
) -> BudgetView:
    """
    Aggregate both collections of a Space against one time window.

    Incomes are grouped by source and expenses by category. Missing
    collections are treated as empty and a missing window as monthly.

    Args:
        incomes: Raw income items
        expenses: Raw expense items
        window: Time window to express amounts in (default: every month)

    Returns:
        A fresh BudgetView
    """
    window = window or DEFAULT_TIME_WINDOW
    income_agg = aggregate(incomes or [], window, _source_of)
    expense_agg = aggregate(expenses or [], window, _category_of)

    return BudgetView(
        window=window,
        incomes=income_agg.normalized_items,
        expenses=expense_agg.normalized_items,
        income_by_source=income_agg.groups,
        expense_by_category=expense_agg.groups,
        income_source_hidden=income_agg.visibility,
        expense_category_hidden=expense_agg.visibility,
        incomes_total=visible_total(income_agg.normalized_items),
        expenses_total=visible_total(expense_agg.normalized_items),
        lookup=ItemLookup.from_items(
            income_agg.normalized_items, expense_agg.normalized_items
        ),
    )
