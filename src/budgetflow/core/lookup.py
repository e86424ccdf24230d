"""
Id-based lookup over both item collections.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, NamedTuple

from .kinds import K

if TYPE_CHECKING:
    from .items import NormalizedBudgetItem


class LookupResult(NamedTuple):
    """
    Outcome of an item lookup.

    Attributes:
        item: The matching normalized item, or None on a miss
        kind: 'income', 'expense' or 'none'
    """

    item: NormalizedBudgetItem | None
    kind: str


MISS = LookupResult(None, K.NONE)


class ItemLookup:
    """
    Constant-time access to a single item and its type tag.

    Incomes take precedence when an id appears in both collections.
    """

    def __init__(
        self,
        incomes: dict[str, NormalizedBudgetItem],
        expenses: dict[str, NormalizedBudgetItem],
    ):
        self._incomes = dict(incomes)
        self._expenses = dict(expenses)

    @classmethod
    def from_items(
        cls,
        incomes: Iterable[NormalizedBudgetItem],
        expenses: Iterable[NormalizedBudgetItem],
    ) -> ItemLookup:
        return cls(
            {item.id: item for item in incomes},
            {item.id: item for item in expenses},
        )

    @property
    def incomes(self) -> dict[str, NormalizedBudgetItem]:
        return dict(self._incomes)

    @property
    def expenses(self) -> dict[str, NormalizedBudgetItem]:
        return dict(self._expenses)

    def lookup(self, item_id: str) -> LookupResult:
        """Return the item with ``item_id`` and its kind; never raises."""
        income = self._incomes.get(item_id)
        if income is not None:
            return LookupResult(income, K.INCOME)
        expense = self._expenses.get(item_id)
        if expense is not None:
            return LookupResult(expense, K.EXPENSE)
        return MISS

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._incomes or item_id in self._expenses

    def __len__(self) -> int:
        return len(self._incomes) + len(self._expenses)
