"""
customer_analytics.health.segments

Segment filtering and role-based shaping.

Responsibilities:
- Apply the business segment predicate before external enrichment.
- Enforce the prefetch safety cap that bounds external fan-out.
- Rank worst-first, cap by role, and build the summary statistics.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Sequence

from customer_analytics.auth.models import Role
from customer_analytics.health.models import (
    AccountMetricSnapshot,
    ExternalDataCoverage,
    HealthRecord,
    HealthSummary,
    Segment,
)
from customer_analytics.signals.models import SignalBatch

INACTIVE_AFTER_DAYS = 45
HIGH_VALUE_SPEND = 100


def matches_segment(snapshot: AccountMetricSnapshot, segment: Segment) -> bool:
    if segment is Segment.INACTIVE:
        return snapshot.last_order_age_days > INACTIVE_AFTER_DAYS
    if segment is Segment.HIGH_VALUE:
        return snapshot.spend_in_window >= HIGH_VALUE_SPEND
    return True


def filter_segment(
    snapshots: Iterable[AccountMetricSnapshot],
    segment: Segment,
    *,
    cap: int,
) -> list[AccountMetricSnapshot]:
    # The cap is independent of the caller's limit: it bounds external calls, not output.
    return [s for s in snapshots if matches_segment(s, segment)][:cap]


def rank(records: Iterable[HealthRecord]) -> list[HealthRecord]:
    # Worst first, so the accounts needing action lead the list.
    return sorted(records, key=lambda r: (r.health_score, r.account_id))


def role_cap(role: Role | None, limit: int, *, readonly_cap: int) -> int:
    if role is Role.READONLY:
        return min(limit, readonly_cap)
    return limit


def summarize(records: Sequence[HealthRecord], *, batch: SignalBatch) -> HealthSummary:
    breakdown = Counter(r.tier for r in records)
    avg = math.floor(sum(r.health_score for r in records) / len(records) + 0.5) if records else 0
    return HealthSummary(
        total_analyzed=len(records),
        segment_breakdown=dict(breakdown),
        avg_health_score=avg,
        external_data_coverage=ExternalDataCoverage(
            satisfaction_available=batch.satisfaction_available,
            support_data_available=batch.support_available,
        ),
    )


def shape(
    records: Iterable[HealthRecord],
    *,
    role: Role | None,
    limit: int,
    readonly_cap: int,
    batch: SignalBatch,
) -> tuple[list[HealthRecord], HealthSummary]:
    ranked = rank(records)
    final = ranked[: role_cap(role, limit, readonly_cap=readonly_cap)]
    return final, summarize(final, batch=batch)


# --- Module Notes -----------------------------------------------------------
# Tier counts and the mean describe the returned records; coverage describes every account
# that was sent to the external sources.
