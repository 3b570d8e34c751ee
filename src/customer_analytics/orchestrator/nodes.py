from __future__ import annotations

from datetime import timedelta
from typing import Any

from customer_analytics.auth.gate import require
from customer_analytics.health.metrics import aggregate_metrics
from customer_analytics.health.models import (
    AccountHealthResponse,
    AccountMetricSnapshot,
    HealthMetrics,
    HealthRecord,
)
from customer_analytics.health.scoring import ScoreInputs, score_account
from customer_analytics.health.segments import filter_segment, shape
from customer_analytics.ledger.models import Ledger
from customer_analytics.observability.logging import get_logger
from customer_analytics.orchestrator.state import HealthState
from customer_analytics.signals.fetcher import ExternalSignalFetcher
from customer_analytics.signals.models import ExternalSignal, SignalBatch

READ_PERMISSION = "read:users"

log = get_logger(__name__)


def _event(event: str, **details: Any) -> dict[str, Any]:
    return {"event": event, "details": details}


async def gate_node(state: HealthState) -> HealthState:
    principal = require(state["auth"], READ_PERMISSION)
    return {
        "principal": principal,
        "trace": [_event("GATE", user=principal.display_name, role=principal.role.value)],
    }


async def aggregate_node(state: HealthState, *, ledger: Ledger) -> HealthState:
    request = state["request"]
    snapshots = aggregate_metrics(ledger, now=state["now"], window_days=request.window_days)
    return {
        "snapshots": snapshots,
        "trace": [_event("AGGREGATE", accounts=len(snapshots), window_days=request.window_days)],
    }


async def segment_node(state: HealthState, *, prefetch_cap: int) -> HealthState:
    segment = state["request"].segment
    candidates = filter_segment(state.get("snapshots", []), segment, cap=prefetch_cap)
    log.info("health.segment_filtered", segment=segment.value, candidates=len(candidates))
    return {
        "candidates": candidates,
        "trace": [_event("SEGMENT", segment=segment.value, candidates=len(candidates))],
    }


async def fetch_signals_node(state: HealthState, *, fetcher: ExternalSignalFetcher) -> HealthState:
    since = state["now"] - timedelta(days=state["request"].window_days)
    ids = [c.account_id for c in state.get("candidates", [])]
    batch = await fetcher.fetch(ids, since=since)
    return {
        "signals": batch,
        "trace": [
            _event(
                "FETCH_SIGNALS",
                accounts=len(ids),
                satisfaction_ok=batch.satisfaction_ok,
                support_ok=batch.support_ok,
            )
        ],
    }


async def score_node(state: HealthState) -> HealthState:
    include_reasons = state["request"].include_reasons
    batch = state.get("signals") or SignalBatch.empty()
    records = [
        _record(c, batch.for_account(c.account_id), include_reasons=include_reasons)
        for c in state.get("candidates", [])
    ]
    return {"records": records, "trace": [_event("SCORE", scored=len(records))]}


async def shape_node(state: HealthState, *, readonly_cap: int) -> HealthState:
    request = state["request"]
    principal = state["principal"]
    final, summary = shape(
        state.get("records", []),
        role=principal.role,
        limit=request.limit,
        readonly_cap=readonly_cap,
        batch=state.get("signals") or SignalBatch.empty(),
    )
    return {
        "response": AccountHealthResponse(accounts=final, summary=summary),
        "trace": [_event("SHAPE", returned=len(final), role=principal.role.value)],
    }


def route_after_segment(state: HealthState) -> str:
    # Nothing to enrich: skip the external calls entirely.
    if state.get("candidates"):
        return "fetch_signals"
    return "score"


def _record(
    snapshot: AccountMetricSnapshot,
    signal: ExternalSignal,
    *,
    include_reasons: bool,
) -> HealthRecord:
    result = score_account(
        ScoreInputs(
            last_order_age_days=snapshot.last_order_age_days,
            order_count_in_window=snapshot.order_count_in_window,
            spend_delta_percent=snapshot.spend_delta_percent,
            satisfaction_score=signal.satisfaction_score,
            open_critical_incidents=signal.open_critical_incidents,
            sla_breaches_in_window=signal.sla_breaches_in_window,
        )
    )
    return HealthRecord(
        account_id=snapshot.account_id,
        name=snapshot.name,
        health_score=result.score,
        tier=result.tier,
        metrics=HealthMetrics(
            last_order_age_days=snapshot.last_order_age_days,
            order_count_in_window=snapshot.order_count_in_window,
            spend_in_window=snapshot.spend_in_window,
            spend_in_prior_window=snapshot.spend_in_prior_window,
            spend_delta_percent=snapshot.spend_delta_percent,
            satisfaction_score=signal.satisfaction_score,
            open_critical_incidents=signal.open_critical_incidents,
            sla_breaches_in_window=signal.sla_breaches_in_window,
        ),
        reasons=list(result.reasons) if include_reasons else None,
    )
