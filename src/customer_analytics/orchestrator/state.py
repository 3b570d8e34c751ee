"""
customer_analytics.orchestrator.state

Typed state schema used by the account health graph.

Responsibilities:
- Define the contract between nodes (inputs/outputs).
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, TypedDict

from customer_analytics.auth.models import AuthContext, Principal
from customer_analytics.health.models import (
    AccountHealthRequest,
    AccountHealthResponse,
    AccountMetricSnapshot,
    HealthRecord,
)
from customer_analytics.orchestrator.reducers import append_trace
from customer_analytics.signals.models import SignalBatch


class HealthState(TypedDict, total=False):
    # Inputs
    auth: AuthContext
    request: AccountHealthRequest
    now: datetime

    # Set by the gate; absent means nothing downstream ran.
    principal: Principal

    # Pipeline products
    snapshots: list[AccountMetricSnapshot]
    candidates: list[AccountMetricSnapshot]
    signals: SignalBatch
    records: list[HealthRecord]

    # Output
    response: AccountHealthResponse

    trace: Annotated[list[dict[str, Any]], append_trace]


# --- Module Notes -----------------------------------------------------------
# State lives for exactly one invocation; nothing here is checkpointed.
