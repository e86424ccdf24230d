"""Space documents: the record the engine reads its items and config from."""

from __future__ import annotations

import json
from copy import deepcopy
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from .cadence import DEFAULT_TIME_WINDOW, Cadence, TimeWindow
from .errors import ConfigError, SpaceFormatError
from .items import BudgetItem, Expense, Income, budget_item_from_dict
from .kinds import K
from .utils import generate_id, now_ms

__all__ = [
    "Space",
    "SpaceConfig",
    "SpaceFormatError",
    "create_space",
    "duplicate_space",
    "load_space",
]

FILE_VERSION = 1


@dataclass(frozen=True)
class SpaceConfig:
    """Per-space settings the engine cares about."""

    time_window: TimeWindow = DEFAULT_TIME_WINDOW
    currency: str = "USD"
    cash_flow_verbiage: str = "default"
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = deepcopy(self.extra)
        data.update(
            {
                "timeWindow": self.time_window.to_dict(),
                "currency": self.currency,
                "cashFlowVerbiage": self.cash_flow_verbiage,
            }
        )
        return data


@dataclass(frozen=True)
class Space:
    """
    A budget workspace: both item collections plus configuration.

    Attributes:
        id: Space identifier
        title: Display title
        description: Optional description
        incomes: Income items in stored order
        expenses: Expense items in stored order
        config: Space settings, including the active time window
        metadata: Opaque bookkeeping (creator, timestamps, versions)
    """

    id: str
    title: str = ""
    description: str = ""
    incomes: tuple[Income, ...] = ()
    expenses: tuple[Expense, ...] = ()
    config: SpaceConfig = field(default_factory=SpaceConfig)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "metadata": deepcopy(self.metadata),
            "incomes": [item.to_dict() for item in self.incomes],
            "expenses": [item.to_dict() for item in self.expenses],
            "config": self.config.to_dict(),
        }


def create_space(user_id: str | None = None, *, currency: str = "USD") -> Space:
    """Create an empty Space with fresh metadata."""
    timestamp = now_ms()
    return Space(
        id=generate_id("space"),
        config=SpaceConfig(currency=currency),
        metadata={
            "createdBy": user_id or "",
            "createdAt": timestamp,
            "updatedAt": timestamp,
            "fileName": "",
            "fileVersion": FILE_VERSION,
        },
    )


def duplicate_space(space: Space) -> Space:
    """Copy a Space under a new id with a "(Copy)" title and fresh timestamps."""
    timestamp = now_ms()
    metadata = deepcopy(space.metadata)
    metadata.update({"createdAt": timestamp, "updatedAt": timestamp})
    return replace(
        space,
        id=generate_id("space"),
        title=f"{space.title} (Copy)",
        metadata=metadata,
    )


def load_space(
    source: str | Path | dict[str, Any], *, format: str | None = None
) -> Space:
    """Parse a Space from a YAML/JSON file or an in-memory mapping."""

    mapping, label = _read_source(source, format=format)
    space_id = mapping.get("id") or generate_id("space")
    if not isinstance(space_id, str):
        raise SpaceFormatError(f"{label}::id: expected a string")
    return Space(
        id=space_id,
        title=_coerce_optional_str(mapping.get("title"), f"{label}::title") or "",
        description=_coerce_optional_str(
            mapping.get("description"), f"{label}::description"
        )
        or "",
        incomes=tuple(_normalize_items(mapping.get("incomes"), K.INCOME, label)),
        expenses=tuple(_normalize_items(mapping.get("expenses"), K.EXPENSE, label)),
        config=_normalize_config(mapping.get("config"), label),
        metadata=_ensure_dict(mapping.get("metadata"), f"{label}::metadata"),
    )


def _read_source(
    source: str | Path | dict[str, Any], *, format: str | None
) -> tuple[dict[str, Any], str]:
    if isinstance(source, dict):
        return deepcopy(source), "<mapping>"

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(path)

    fmt = (format or path.suffix.lstrip(".")).lower()
    text = path.read_text(encoding="utf-8")
    if fmt in {"yaml", "yml", ""}:
        data = yaml.safe_load(text)
    elif fmt == "json":
        data = json.loads(text)
    else:
        raise SpaceFormatError(f"Unsupported space format '{fmt}' for {path}")

    if not isinstance(data, dict):
        raise SpaceFormatError(f"Space root must be a mapping (source={path})")
    return data, str(path)


def _normalize_items(raw: Any, kind: str, label: str) -> list[BudgetItem]:
    ctx = f"{label}::{kind}s"
    entries = _ensure_list(raw, ctx)
    items: list[BudgetItem] = []
    seen: set[str] = set()
    for idx, entry in enumerate(entries):
        entry_ctx = f"{ctx}[{idx}]"
        data = _ensure_dict(entry, entry_ctx)
        amount = data.get("amount")
        if amount is not None and (
            isinstance(amount, bool) or not isinstance(amount, (int, float))
        ):
            raise SpaceFormatError(f"{entry_ctx}.amount: expected a number")
        if amount is not None and amount < 0:
            raise SpaceFormatError(f"{entry_ctx}.amount: must be >= 0")
        hidden = data.get("hidden")
        if hidden is not None and not isinstance(hidden, bool):
            raise SpaceFormatError(f"{entry_ctx}.hidden: expected a boolean")
        try:
            item = budget_item_from_dict(data, kind)
        except ConfigError as exc:
            raise SpaceFormatError(f"{entry_ctx}: {exc}") from exc
        if item.id in seen:
            raise SpaceFormatError(f"{entry_ctx}: duplicate id '{item.id}'")
        seen.add(item.id)
        items.append(item)
    return items


def _normalize_config(raw: Any, label: str) -> SpaceConfig:
    ctx = f"{label}::config"
    config = _ensure_dict(raw, ctx)
    try:
        window = Cadence.coerce(config.pop("timeWindow", None))
    except ConfigError as exc:
        raise SpaceFormatError(f"{ctx}.timeWindow: {exc}") from exc
    currency = _coerce_optional_str(config.pop("currency", None), f"{ctx}.currency")
    verbiage = _coerce_optional_str(
        config.pop("cashFlowVerbiage", None), f"{ctx}.cashFlowVerbiage"
    )
    return SpaceConfig(
        time_window=window,
        currency=currency or "USD",
        cash_flow_verbiage=verbiage or "default",
        extra=config,
    )


def _coerce_str(value: Any, ctx: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SpaceFormatError(f"{ctx}: expected non-empty string")
    return value


def _coerce_optional_str(value: Any, ctx: str) -> str | None:
    if value is None or value == "":
        return None
    return _coerce_str(value, ctx)


def _ensure_dict(value: Any, ctx: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SpaceFormatError(f"{ctx}: expected a mapping")
    return deepcopy(value)


def _ensure_list(value: Any, ctx: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SpaceFormatError(f"{ctx}: expected a list")
    return list(value)
