"""
Budget item classes for BudgetFlow.

Items store their amount in their own cadence. Normalized amounts are always a
derived view (:class:`NormalizedBudgetItem`) and are never written back.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .cadence import DEFAULT_TIME_WINDOW, Cadence
from .errors import ConfigError
from .kinds import K


@dataclass(frozen=True)
class BudgetItem:
    """
    Base class for recurring budget items.

    Attributes:
        id: Unique, stable identifier within its collection
        label: Display name
        description: Optional one-line description
        notes: Optional free-form notes
        amount: Non-negative amount per own cadence (never pre-normalized)
        cadence: How often the amount recurs
        hidden: Whether the item is excluded from visible totals
        created_at: Creation timestamp (epoch milliseconds)
        updated_at: Last update timestamp (epoch milliseconds)
    """

    id: str
    label: str = ""
    description: str = ""
    notes: str = ""
    amount: float = 0.0
    cadence: Cadence = DEFAULT_TIME_WINDOW
    hidden: bool = False
    created_at: int | None = None
    updated_at: int | None = None

    kind = K.NONE

    @property
    def group_key(self) -> str | None:
        """Key the item is grouped under (source or category)."""
        return None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "notes": self.notes,
            "amount": self.amount,
            "cadence": self.cadence.to_dict(),
            "hidden": self.hidden,
        }
        if self.created_at is not None:
            data["createdAt"] = self.created_at
        if self.updated_at is not None:
            data["updatedAt"] = self.updated_at
        return data


@dataclass(frozen=True)
class Income(BudgetItem):
    """Recurring income grouped by ``source`` (e.g., employer, client)."""

    source: str | None = None
    type: str | None = None

    kind = K.INCOME

    @property
    def group_key(self) -> str | None:
        return self.source

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["source"] = self.source
        if self.type is not None:
            data["type"] = self.type
        return data


@dataclass(frozen=True)
class Expense(BudgetItem):
    """Recurring expense grouped by ``category`` with optional sub-category."""

    category: str | None = None
    sub_category: str | None = None

    kind = K.EXPENSE

    @property
    def group_key(self) -> str | None:
        return self.category

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["category"] = self.category
        if self.sub_category is not None:
            data["subCategory"] = self.sub_category
        return data


@dataclass(frozen=True)
class NormalizedBudgetItem:
    """
    A budget item with its amount expressed in the active time window.

    Ephemeral: recomputed whenever the window or the source collection changes.

    Attributes:
        item: The untouched source item
        amount: Normalized amount per time window
        original_amount: The stored own-cadence amount
    """

    item: BudgetItem
    amount: float
    original_amount: float

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def label(self) -> str:
        return self.item.label

    @property
    def hidden(self) -> bool:
        return bool(self.item.hidden)

    @property
    def cadence(self) -> Cadence:
        return self.item.cadence

    @property
    def kind(self) -> str:
        return self.item.kind

    @property
    def group_key(self) -> str | None:
        return self.item.group_key


_ITEM_CLASSES: dict[str, type[BudgetItem]] = {K.INCOME: Income, K.EXPENSE: Expense}


def budget_item_from_dict(data: Mapping[str, Any], kind: str) -> BudgetItem:
    """
    Build an Income or Expense from a camelCase Space document entry.

    Missing optional fields degrade to defaults: no amount → 0, no cadence →
    monthly, no hidden flag → visible.

    Args:
        data: Mapping with at least an ``id``
        kind: 'income' or 'expense'

    Returns:
        The typed budget item

    Raises:
        ConfigError: If the kind is unknown, the id is missing or the cadence is invalid
    """
    if kind not in _ITEM_CLASSES:
        raise ConfigError(f"Unknown budget item kind '{kind}'")
    item_id = data.get("id")
    if not isinstance(item_id, str) or not item_id:
        raise ConfigError(f"{kind} entry is missing a string 'id'")

    common: dict[str, Any] = dict(
        id=item_id,
        label=data.get("label") or "",
        description=data.get("description") or "",
        notes=data.get("notes") or "",
        amount=float(data.get("amount") or 0.0),
        cadence=Cadence.coerce(data.get("cadence")),
        hidden=bool(data.get("hidden", False)),
        created_at=data.get("createdAt"),
        updated_at=data.get("updatedAt"),
    )
    if kind == K.INCOME:
        return Income(**common, source=data.get("source"), type=data.get("type"))
    return Expense(
        **common,
        category=data.get("category"),
        sub_category=data.get("subCategory"),
    )

