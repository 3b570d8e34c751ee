"""
customer_analytics.services.health_service

Account health workflow service.

Responsibilities:
- Compile the workflow graph once per process with its ledger and signal fetcher.
- Run one stateless invocation per call.
- Keep a typed outcome internally (ok / unauthenticated / forbidden / failed) while the
  external contract always returns a well-formed response.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

from customer_analytics.auth.models import AuthContext
from customer_analytics.errors import AuthenticationRequired, InsufficientPermission
from customer_analytics.health.models import AccountHealthRequest, AccountHealthResponse
from customer_analytics.ledger.models import Ledger
from customer_analytics.observability.logging import get_logger
from customer_analytics.orchestrator.graph import build_graph
from customer_analytics.settings import Settings
from customer_analytics.signals.fetcher import ExternalSignalFetcher
from customer_analytics.signals.sources import (
    SimulatedSatisfactionSource,
    SimulatedSupportSource,
)

log = get_logger(__name__)

OutcomeStatus = Literal["ok", "unauthenticated", "forbidden", "failed"]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True, slots=True)
class WorkflowOutcome:
    status: OutcomeStatus
    response: AccountHealthResponse
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class AccountHealthService:
    def __init__(
        self,
        *,
        ledger: Ledger,
        fetcher: ExternalSignalFetcher,
        prefetch_cap: int = 500,
        readonly_cap: int = 10,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._ledger = ledger
        self._clock = clock
        self._graph = build_graph(
            ledger=ledger,
            fetcher=fetcher,
            prefetch_cap=prefetch_cap,
            readonly_cap=readonly_cap,
        )

    @classmethod
    def from_settings(cls, settings: Settings, *, ledger: Ledger) -> AccountHealthService:
        fetcher = ExternalSignalFetcher(
            satisfaction=SimulatedSatisfactionSource(
                seed=settings.signal_seed,
                miss_rate=settings.satisfaction_miss_rate,
                latency_ms=settings.satisfaction_latency_ms,
            ),
            support=SimulatedSupportSource(
                seed=settings.signal_seed,
                latency_ms=settings.support_latency_ms,
            ),
            timeout_seconds=settings.signal_timeout_seconds,
        )
        return cls(
            ledger=ledger,
            fetcher=fetcher,
            prefetch_cap=settings.prefetch_cap,
            readonly_cap=settings.readonly_result_cap,
        )

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    async def run(
        self,
        *,
        auth: AuthContext,
        request: AccountHealthRequest,
        now: datetime | None = None,
    ) -> WorkflowOutcome:
        now = now or self._clock()
        try:
            final = await self._graph.ainvoke({"auth": auth, "request": request, "now": now, "trace": []})
        except AuthenticationRequired as e:
            log.info("health.denied", reason="unauthenticated")
            return WorkflowOutcome("unauthenticated", AccountHealthResponse.empty(), str(e))
        except InsufficientPermission as e:
            log.info(
                "health.denied",
                reason="forbidden",
                permission=e.permission,
                role=auth.role.value if auth.role else None,
            )
            return WorkflowOutcome("forbidden", AccountHealthResponse.empty(), str(e))
        except Exception as e:
            log.exception("health.failed", segment=request.segment.value)
            return WorkflowOutcome("failed", AccountHealthResponse.empty(), repr(e))

        response: AccountHealthResponse = final["response"]
        log.info(
            "health.completed",
            user=auth.principal.display_name if auth.principal else None,
            segment=request.segment.value,
            window_days=request.window_days,
            returned=len(response.accounts),
            avg_health_score=response.summary.avg_health_score,
        )
        return WorkflowOutcome("ok", response)

    async def compute(
        self,
        *,
        auth: AuthContext,
        request: AccountHealthRequest,
        now: datetime | None = None,
    ) -> AccountHealthResponse:
        outcome = await self.run(auth=auth, request=request, now=now)
        return outcome.response


# --- Module Notes -----------------------------------------------------------
# Denied and "nothing matched" are deliberately indistinguishable in `compute`'s result;
# only `run` and the logs tell them apart.
