"""
Utility functions for BudgetFlow.
"""

from __future__ import annotations

import time
import uuid


def generate_id(prefix: str) -> str:
    """
    Generate a fresh opaque identifier with a readable prefix.

    Identifiers look like ``"budget_3f9c0a7e12b4"``. They are unique per call,
    so callers must not rely on them being stable across repeated builds.

    Args:
        prefix: Namespace for the identifier (e.g., 'space', 'budget')

    Returns:
        A new identifier string
    """
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def now_ms() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return int(time.time() * 1000)

