"""
Cadence normalization for recurring budget items.

A cadence describes how often an amount recurs ("every 2 weeks"). A time window
has the same shape and describes the period every amount is expressed in
("per month"). Normalizing converts both to days with calendar approximations
and rescales the amount, so items with different cadences become comparable.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import ConfigError
from .kinds import K

# Calendar approximations, not exact calendar arithmetic
PERIOD_DAYS: dict[str, int] = {
    K.DAY: 1,
    K.WEEK: 7,
    K.MONTH: 30,
    K.YEAR: 365,
}


@dataclass(frozen=True)
class Cadence:
    """
    Repetition period of a budget item: every ``interval`` ``type``s.

    The same shape doubles as the normalization target (see :data:`TimeWindow`).

    Attributes:
        type: One of 'day', 'week', 'month', 'year'
        interval: Positive number of periods between repetitions

    Raises:
        ConfigError: If the type is unknown or the interval is not a positive integer
    """

    type: str = K.MONTH
    interval: int = 1

    def __post_init__(self) -> None:
        if self.type not in PERIOD_DAYS:
            raise ConfigError(
                f"Unknown cadence type '{self.type}' "
                f"(expected one of {', '.join(K.period_types())})"
            )
        if isinstance(self.interval, bool) or not isinstance(self.interval, int):
            raise ConfigError(
                f"Cadence interval must be an integer, got {self.interval!r}"
            )
        if self.interval < 1:
            raise ConfigError(f"Cadence interval must be >= 1, got {self.interval}")

    @property
    def days(self) -> int:
        """Length of one repetition in days."""
        return PERIOD_DAYS[self.type] * self.interval

    @classmethod
    def coerce(cls, value: Cadence | Mapping[str, Any] | None) -> Cadence:
        """
        Build a Cadence from a Cadence, a ``{"type", "interval"}`` mapping or None.

        Missing values fall back to the default monthly cadence.
        """
        if value is None:
            return DEFAULT_TIME_WINDOW
        if isinstance(value, Cadence):
            return value
        if isinstance(value, Mapping):
            interval = value.get("interval", 1)
            if isinstance(interval, float) and interval.is_integer():
                interval = int(interval)
            return cls(type=value.get("type") or K.MONTH, interval=interval)
        raise ConfigError(f"Cannot build a cadence from {type(value).__name__}")

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "interval": self.interval}

    def __str__(self) -> str:
        if self.interval == 1:
            return f"every {self.type}"
        return f"every {self.interval} {self.type}s"


# A time window is the normalization target and has the same shape
TimeWindow = Cadence

DEFAULT_TIME_WINDOW = Cadence(K.MONTH, 1)


def cadence_days(cadence: Cadence) -> int:
    """Convert a cadence or time window to its length in days."""
    return cadence.days


def normalize_amount(amount: float, cadence: Cadence, window: TimeWindow) -> float:
    """
    Express an amount recurring at ``cadence`` as an amount per ``window``.

    normalized = amount * (window_days / cadence_days)

    The function is linear in ``amount`` and is the identity when cadence and
    window are equal. No rounding is applied.

    Args:
        amount: The item's own-cadence amount
        cadence: How often the amount recurs
        window: Target time window

    Returns:
        The equivalent amount per window

    Example:
        ```python
        >>> normalize_amount(100.0, Cadence("week", 1), Cadence("month", 1))
        428.57142857142856
        ```
    """
    if not amount:
        return 0.0
    return amount * (cadence_days(window) / cadence_days(cadence))
