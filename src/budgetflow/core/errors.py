"""
Error classes for BudgetFlow.

The aggregation and layout engine is total over its documented inputs, so
errors only surface at the input boundary: building value types from raw data
and loading Space documents.
"""


class ConfigError(Exception):
    """
    Invalid configuration value at the input boundary.

    Raised when a value type cannot be built from the data it was given, for
    example a cadence with an unknown period type or a non-positive interval.

    **Example Usage:**
        ```python
        from budgetflow.core.cadence import Cadence
        from budgetflow.core.errors import ConfigError

        try:
            Cadence("fortnight", 1)
        except ConfigError as e:
            print(f"Configuration error: {e}")
        ```
    """

    pass


class SpaceFormatError(ConfigError, ValueError):
    """Raised when a Space document cannot be parsed or validated."""
