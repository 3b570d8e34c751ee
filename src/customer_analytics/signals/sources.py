"""
customer_analytics.signals.sources

External signal sources.

Responsibilities:
- Define the source protocols the fetcher depends on.
- Provide simulated satisfaction and support systems with latency and missing data.

Simulated values are drawn from a `random.Random` seeded per (seed, account), so the same
account yields the same value across calls.
"""

from __future__ import annotations

import asyncio
import math
import random
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Protocol

from customer_analytics.signals.models import SupportRecord


class SatisfactionSource(Protocol):
    async def fetch_satisfaction(self, account_ids: Sequence[str]) -> Mapping[str, float | None]: ...


class SupportSource(Protocol):
    async def fetch_support(
        self, account_ids: Sequence[str], *, since: datetime
    ) -> Mapping[str, SupportRecord | None]: ...


def _numeric_id(account_id: str) -> int | None:
    try:
        return int(account_id)
    except ValueError:
        return None


async def _simulate_latency(latency_ms: int) -> None:
    if latency_ms <= 0:
        return
    # Jitter only affects timing, not values.
    await asyncio.sleep(latency_ms * random.uniform(1.0, 3.0) / 1000)


class SimulatedSatisfactionSource:
    def __init__(self, *, seed: int = 7, miss_rate: float = 0.2, latency_ms: int = 50) -> None:
        self._seed = seed
        self._miss_rate = miss_rate
        self._latency_ms = latency_ms

    async def fetch_satisfaction(self, account_ids: Sequence[str]) -> dict[str, float | None]:
        await _simulate_latency(self._latency_ms)
        return {account_id: self._score(account_id) for account_id in account_ids}

    def _score(self, account_id: str) -> float | None:
        rng = random.Random(f"{self._seed}:satisfaction:{account_id}")
        if rng.random() < self._miss_rate:
            return None
        uid = _numeric_id(account_id)
        base = 50 + (uid % 40) - 20 if uid is not None else 50
        variation = (rng.random() - 0.5) * 20
        return float(max(0, min(100, round(base + variation))))


class SimulatedSupportSource:
    def __init__(self, *, seed: int = 7, latency_ms: int = 30) -> None:
        self._seed = seed
        self._latency_ms = latency_ms

    async def fetch_support(
        self, account_ids: Sequence[str], *, since: datetime
    ) -> dict[str, SupportRecord | None]:
        await _simulate_latency(self._latency_ms)
        window_key = since.date().isoformat()
        return {account_id: self._record(account_id, window_key) for account_id in account_ids}

    def _record(self, account_id: str, window_key: str) -> SupportRecord:
        rng = random.Random(f"{self._seed}:support:{account_id}:{window_key}")
        uid = _numeric_id(account_id)
        # Higher ids model enterprise customers with more support traffic.
        risk = 2 if uid is not None and uid > 15 else 1

        incidents = math.ceil(rng.random() * 3) if rng.random() < 0.1 * risk else 0
        breaches = math.ceil(rng.random() * 2) if rng.random() < 0.15 * risk else 0
        return SupportRecord(open_critical_incidents=incidents, sla_breaches_in_window=breaches)
