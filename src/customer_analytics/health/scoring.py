"""
customer_analytics.health.scoring

Composite health scoring.

Responsibilities:
- Normalize recency, momentum, satisfaction and reliability onto 0..100.
- Combine them into a bounded integer score and derive the tier.
- Produce advisory reason codes (never fed back into the score).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from customer_analytics.health.models import Tier

WEIGHTS = {
    "recency": 0.30,
    "momentum": 0.30,
    "satisfaction": 0.25,
    "reliability": 0.15,
}

NEUTRAL_SATISFACTION = 50.0
GOOD_THRESHOLD = 75
WATCH_THRESHOLD = 50

INCIDENT_PENALTY = 25
SLA_BREACH_PENALTY = 15

STALE_ORDER_DAYS = 60
SPEND_DROP_PERCENT = -30
LOW_SATISFACTION = 30


@dataclass(frozen=True, slots=True)
class ScoreInputs:
    last_order_age_days: int
    order_count_in_window: int
    spend_delta_percent: float
    satisfaction_score: float | None = None
    open_critical_incidents: int = 0
    sla_breaches_in_window: int = 0


@dataclass(frozen=True, slots=True)
class ScoreResult:
    score: int
    tier: Tier
    reasons: tuple[str, ...]
    recency: float
    momentum: float
    satisfaction: float
    reliability: float


def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def tier_for(score: int) -> Tier:
    if score >= GOOD_THRESHOLD:
        return Tier.GOOD
    if score >= WATCH_THRESHOLD:
        return Tier.WATCH
    return Tier.AT_RISK


def score_account(m: ScoreInputs) -> ScoreResult:
    recency = clamp(100 - m.last_order_age_days)
    # -100% -> 0, 0% -> 50, +100% -> 100
    momentum = clamp((m.spend_delta_percent + 100) / 2)
    satisfaction = (
        NEUTRAL_SATISFACTION if m.satisfaction_score is None else clamp(m.satisfaction_score)
    )
    reliability = clamp(
        100
        - (m.open_critical_incidents * INCIDENT_PENALTY + m.sla_breaches_in_window * SLA_BREACH_PENALTY)
    )

    composite = clamp(
        recency * WEIGHTS["recency"]
        + momentum * WEIGHTS["momentum"]
        + satisfaction * WEIGHTS["satisfaction"]
        + reliability * WEIGHTS["reliability"]
    )
    # Half rounds up (74.5 -> 75) after trimming float noise.
    score = int(math.floor(round(composite, 6) + 0.5))

    return ScoreResult(
        score=score,
        tier=tier_for(score),
        reasons=tuple(reasons_for(m)),
        recency=recency,
        momentum=momentum,
        satisfaction=satisfaction,
        reliability=reliability,
    )


def reasons_for(m: ScoreInputs) -> list[str]:
    reasons: list[str] = []
    if m.last_order_age_days > STALE_ORDER_DAYS:
        reasons.append(f"No recent orders (>{STALE_ORDER_DAYS} days)")
    if m.spend_delta_percent < SPEND_DROP_PERCENT:
        reasons.append("Spend down >30% vs prior window")
    satisfaction = NEUTRAL_SATISFACTION if m.satisfaction_score is None else m.satisfaction_score
    if satisfaction < LOW_SATISFACTION:
        reasons.append("Low satisfaction score")
    if m.open_critical_incidents > 0:
        reasons.append(f"{m.open_critical_incidents} open critical support incident(s)")
    if m.sla_breaches_in_window > 0:
        reasons.append(f"{m.sla_breaches_in_window} recent SLA breach(es)")
    if m.order_count_in_window == 0:
        reasons.append("No orders in analysis window")
    return reasons
