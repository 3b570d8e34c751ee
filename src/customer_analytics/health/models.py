"""
customer_analytics.health.models

Request/response contracts and derived snapshots for the account health workflow.

Responsibilities:
- Validate workflow parameters (segment, window, limit, reasons flag).
- Define the per-account metric snapshot and the returned `HealthRecord`.
- Provide the zeroed "always answer" response.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Segment(str, Enum):
    ALL = "all"
    INACTIVE = "inactive"
    HIGH_VALUE = "highValue"


class Tier(str, Enum):
    GOOD = "good"
    WATCH = "watch"
    AT_RISK = "at_risk"


class AccountHealthRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    segment: Segment = Segment.ALL
    window_days: int = Field(default=90, gt=0, le=365)
    limit: int = Field(default=50, gt=0, le=200)
    include_reasons: bool = True


@dataclass(frozen=True, slots=True)
class AccountMetricSnapshot:
    account_id: str
    name: str
    last_order_age_days: int
    order_count_in_window: int
    spend_in_window: float
    spend_in_prior_window: float
    spend_delta_percent: float


class HealthMetrics(BaseModel):
    last_order_age_days: int = Field(ge=0)
    order_count_in_window: int = Field(ge=0)
    spend_in_window: float = Field(ge=0)
    spend_in_prior_window: float = Field(ge=0)
    spend_delta_percent: float
    # External signals; None means the satisfaction source had no value.
    satisfaction_score: float | None = None
    open_critical_incidents: int = Field(default=0, ge=0)
    sla_breaches_in_window: int = Field(default=0, ge=0)


class HealthRecord(BaseModel):
    account_id: str
    name: str
    health_score: int = Field(ge=0, le=100)
    tier: Tier
    metrics: HealthMetrics
    reasons: list[str] | None = None


class ExternalDataCoverage(BaseModel):
    satisfaction_available: int = 0
    support_data_available: int = 0


class HealthSummary(BaseModel):
    total_analyzed: int = 0
    segment_breakdown: dict[Tier, int] = Field(default_factory=dict)
    avg_health_score: int = 0
    external_data_coverage: ExternalDataCoverage = Field(default_factory=ExternalDataCoverage)


class AccountHealthResponse(BaseModel):
    accounts: list[HealthRecord] = Field(default_factory=list)
    summary: HealthSummary = Field(default_factory=HealthSummary)

    @classmethod
    def empty(cls) -> AccountHealthResponse:
        return cls()
