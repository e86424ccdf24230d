"""
BudgetFlow kind constants.
"""


class K:
    # === Cadence / time window period types ===
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    # === Budget item types ===
    INCOME = "income"
    EXPENSE = "expense"
    NONE = "none"  # Lookup miss

    # === Graph node kinds ===
    NODE_LEAF = "leaf"  # One budget item
    NODE_GROUP = "group"  # Source / category bucket
    NODE_CORE = "core"  # Diagram-wide budget center

    # === Graph edge kinds ===
    EDGE_INFLOW = "inflow"
    EDGE_OUTFLOW = "outflow"
    EDGE_HIDDEN = "hidden"

    @classmethod
    def period_types(cls) -> list[str]:
        """Enumerate the supported cadence period types."""
        return [cls.DAY, cls.WEEK, cls.MONTH, cls.YEAR]

    @classmethod
    def budget_types(cls) -> list[str]:
        return [cls.INCOME, cls.EXPENSE]

    @classmethod
    def node_kinds(cls) -> list[str]:
        return [cls.NODE_LEAF, cls.NODE_GROUP, cls.NODE_CORE]

    @classmethod
    def edge_kinds(cls) -> list[str]:
        return [cls.EDGE_INFLOW, cls.EDGE_OUTFLOW, cls.EDGE_HIDDEN]
