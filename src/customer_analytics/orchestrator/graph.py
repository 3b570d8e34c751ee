from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from langgraph.graph import END, StateGraph

from customer_analytics.ledger.models import Ledger
from customer_analytics.orchestrator.nodes import (
    aggregate_node,
    fetch_signals_node,
    gate_node,
    route_after_segment,
    score_node,
    segment_node,
    shape_node,
)
from customer_analytics.orchestrator.state import HealthState
from customer_analytics.signals.fetcher import ExternalSignalFetcher


def build_graph(
    *,
    ledger: Ledger,
    fetcher: ExternalSignalFetcher,
    prefetch_cap: int,
    readonly_cap: int,
):
    """
    Returns a compiled LangGraph runnable.

    gate -> aggregate -> segment -> [fetch_signals] -> score -> shape
    """

    graph = StateGraph(HealthState)

    graph.add_node("gate", gate_node)
    graph.add_node("aggregate", _bind(aggregate_node, ledger=ledger))
    graph.add_node("segment", _bind(segment_node, prefetch_cap=prefetch_cap))
    graph.add_node("fetch_signals", _bind(fetch_signals_node, fetcher=fetcher))
    graph.add_node("score", score_node)
    graph.add_node("shape", _bind(shape_node, readonly_cap=readonly_cap))

    graph.set_entry_point("gate")

    graph.add_edge("gate", "aggregate")
    graph.add_edge("aggregate", "segment")
    graph.add_conditional_edges(
        "segment",
        route_after_segment,
        {"fetch_signals": "fetch_signals", "score": "score"},
    )
    graph.add_edge("fetch_signals", "score")
    graph.add_edge("score", "shape")
    graph.add_edge("shape", END)

    return graph.compile()


def _bind(
    fn: Callable[..., Awaitable[HealthState]],
    **kwargs: Any,
) -> Callable[[HealthState], Awaitable[HealthState]]:
    async def _wrapped(state: HealthState) -> HealthState:
        return await fn(state, **kwargs)

    return _wrapped
