"""
customer_analytics.signals.fetcher

Fan-out/fan-in over the two external sources.

Responsibilities:
- Dispatch the satisfaction and support branches together and wait for both.
- Guard each branch with its own timeout and failure handler, mapping a miss to
  "unavailable" before the join so one slow source cannot sink the other.
- Never raise for a per-account miss or a failed branch.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Sequence
from datetime import datetime
from types import MappingProxyType
from typing import TypeVar

from customer_analytics.observability.logging import get_logger
from customer_analytics.signals.models import ExternalSignal, SignalBatch, SupportRecord
from customer_analytics.signals.sources import SatisfactionSource, SupportSource

log = get_logger(__name__)

T = TypeVar("T")


class ExternalSignalFetcher:
    def __init__(
        self,
        *,
        satisfaction: SatisfactionSource,
        support: SupportSource,
        timeout_seconds: float = 2.0,
    ) -> None:
        self._satisfaction = satisfaction
        self._support = support
        self._timeout = timeout_seconds

    async def fetch(self, account_ids: Sequence[str], *, since: datetime) -> SignalBatch:
        ids = list(dict.fromkeys(account_ids))
        if not ids:
            return SignalBatch.empty()

        satisfaction, support = await asyncio.gather(
            self._guarded("satisfaction", self._satisfaction_branch(ids), len(ids)),
            self._guarded("support", self._support_branch(ids, since), len(ids)),
        )

        signals = {
            account_id: ExternalSignal(
                satisfaction_score=satisfaction.get(account_id) if satisfaction else None,
                support=support.get(account_id) if support else None,
            )
            for account_id in ids
        }
        batch = SignalBatch(
            signals=MappingProxyType(signals),
            satisfaction_ok=satisfaction is not None,
            support_ok=support is not None,
        )
        log.info(
            "signals.fetched",
            accounts=len(ids),
            satisfaction_available=batch.satisfaction_available,
            support_available=batch.support_available,
        )
        return batch

    async def _satisfaction_branch(self, ids: list[str]) -> dict[str, float | None]:
        raw = await self._satisfaction.fetch_satisfaction(ids)
        # A non-mapping payload fails here, inside the guard, and degrades only this branch.
        return {account_id: _as_score(raw.get(account_id)) for account_id in ids}

    async def _support_branch(self, ids: list[str], since: datetime) -> dict[str, SupportRecord | None]:
        raw = await self._support.fetch_support(ids, since=since)
        return {account_id: _as_support(raw.get(account_id)) for account_id in ids}

    async def _guarded(self, branch: str, call: Awaitable[T], accounts: int) -> T | None:
        try:
            return await asyncio.wait_for(call, timeout=self._timeout)
        except TimeoutError:
            log.warning(
                "signals.branch_timeout",
                branch=branch,
                accounts=accounts,
                timeout_seconds=self._timeout,
            )
        except Exception as e:
            log.warning("signals.branch_failed", branch=branch, accounts=accounts, error=repr(e))
        return None


def _as_score(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _as_support(value: object) -> SupportRecord | None:
    if not isinstance(value, SupportRecord):
        return None
    return SupportRecord(
        open_critical_incidents=max(0, value.open_critical_incidents),
        sla_breaches_in_window=max(0, value.sla_breaches_in_window),
    )


# --- Module Notes -----------------------------------------------------------
# No retries inside a request: a branch that misses degrades to defaults for this call only.
