"""
customer_analytics.orchestrator.reducers

Reducers define how LangGraph merges partial state updates.
"""

from __future__ import annotations

from typing import Any


def append_trace(
    left: list[dict[str, Any]] | None, right: list[dict[str, Any]] | None
) -> list[dict[str, Any]]:
    """
    Append-only reducer for workflow trace events.

    Nodes return `{"trace": [event]}` and this reducer concatenates.
    """

    if not left:
        return list(right or [])
    if not right:
        return list(left)
    return [*left, *right]
