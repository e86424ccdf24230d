"""
Summary analytics for budget views.

This module turns the aggregator's output into pandas tables for summary
screens, exports and notebooks. Amounts are expressed in the view's time
window; nothing here re-normalizes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from budgetflow.core.aggregator import BudgetView, Group
    from budgetflow.core.items import NormalizedBudgetItem

ITEM_COLUMNS = [
    "id",
    "label",
    "group",
    "amount",
    "original_amount",
    "cadence_type",
    "cadence_interval",
    "hidden",
]
GROUP_COLUMNS = [
    "total",
    "complete_total",
    "hidden_total",
    "item_count",
    "all_hidden",
    "share",
]


def items_frame(normalized_items: Iterable[NormalizedBudgetItem]) -> pd.DataFrame:
    """
    One row per normalized item, in the given order.

    Args:
        normalized_items: Items as produced by the aggregator

    Returns:
        DataFrame with columns id, label, group, amount, original_amount,
        cadence_type, cadence_interval, hidden
    """
    rows = [
        {
            "id": item.id,
            "label": item.label,
            "group": item.group_key,
            "amount": item.amount,
            "original_amount": item.original_amount,
            "cadence_type": item.cadence.type,
            "cadence_interval": item.cadence.interval,
            "hidden": item.hidden,
        }
        for item in normalized_items
    ]
    return pd.DataFrame(rows, columns=ITEM_COLUMNS)


def group_summary(
    groups: Mapping[str, Group], visibility: Mapping[str, bool]
) -> pd.DataFrame:
    """
    One row per group, in group order (complete total descending).

    ``share`` is each group's visible total over the sum of visible totals,
    NaN when nothing is visible.

    Args:
        groups: Groups keyed by source/category
        visibility: Group key -> all items hidden

    Returns:
        DataFrame indexed by group key
    """
    frame = pd.DataFrame(
        [
            {
                "key": key,
                "total": group.total,
                "complete_total": group.complete_total,
                "hidden_total": group.hidden_total,
                "item_count": len(group.items),
                "all_hidden": bool(visibility.get(key, False)),
            }
            for key, group in groups.items()
        ],
        columns=["key", *GROUP_COLUMNS[:-1]],
    ).set_index("key")

    visible = frame["total"].sum()
    frame["share"] = frame["total"] / visible if visible > 0 else np.nan
    return frame


def budget_summary(view: BudgetView) -> dict[str, Any]:
    """
    Headline figures for a budget view.

    Savings rate = (incomes_total - expenses_total) / incomes_total, NaN when
    there is no visible income.
    """
    incomes_total = view.incomes_total
    expenses_total = view.expenses_total
    net = incomes_total - expenses_total
    return {
        "window": str(view.window),
        "incomes_total": incomes_total,
        "expenses_total": expenses_total,
        "net": net,
        "savings_rate": net / incomes_total if incomes_total > 0 else np.nan,
        "income_groups": len(view.income_by_source),
        "expense_groups": len(view.expense_by_category),
    }
