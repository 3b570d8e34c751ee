"""
tests.test_signals

External signal fan-out/fan-in and the simulated sources.
"""

from __future__ import annotations

import pytest

from customer_analytics.signals.fetcher import ExternalSignalFetcher
from customer_analytics.signals.models import SupportRecord
from customer_analytics.signals.sources import SimulatedSatisfactionSource, SimulatedSupportSource
from support import NOW, StaticSatisfaction, StaticSupport


@pytest.mark.asyncio
async def test_both_branches_are_joined_per_account() -> None:
    satisfaction = StaticSatisfaction({"1": 72.0, "2": None})
    support = StaticSupport({"1": SupportRecord(1, 2), "2": None})
    fetcher = ExternalSignalFetcher(satisfaction=satisfaction, support=support)

    batch = await fetcher.fetch(["1", "2", "1"], since=NOW)

    assert satisfaction.calls == [["1", "2"]]
    assert support.since == [NOW]
    assert batch.for_account("1").satisfaction_score == 72.0
    assert batch.for_account("1").open_critical_incidents == 1
    assert batch.for_account("1").sla_breaches_in_window == 2
    assert batch.for_account("2").satisfaction_score is None
    assert batch.for_account("2").support is None
    assert batch.for_account("2").open_critical_incidents == 0
    assert batch.satisfaction_available == 1
    assert batch.support_available == 1


@pytest.mark.asyncio
async def test_failed_branch_degrades_only_its_field() -> None:
    fetcher = ExternalSignalFetcher(
        satisfaction=StaticSatisfaction(error=RuntimeError("satisfaction API down")),
        support=StaticSupport({"1": SupportRecord(2, 0)}),
    )

    batch = await fetcher.fetch(["1"], since=NOW)

    assert not batch.satisfaction_ok
    assert batch.support_ok
    assert batch.for_account("1").satisfaction_score is None
    assert batch.for_account("1").open_critical_incidents == 2


class _ListPayloadSupport:
    async def fetch_support(self, account_ids, *, since):
        return [SupportRecord(1, 1) for _ in account_ids]


@pytest.mark.asyncio
async def test_malformed_branch_payload_degrades_only_its_field() -> None:
    fetcher = ExternalSignalFetcher(
        satisfaction=StaticSatisfaction({"1": 55.0}),
        support=_ListPayloadSupport(),
    )

    batch = await fetcher.fetch(["1"], since=NOW)

    assert batch.satisfaction_ok
    assert not batch.support_ok
    assert batch.for_account("1").satisfaction_score == 55.0
    assert batch.for_account("1").support is None


@pytest.mark.asyncio
async def test_slow_branch_times_out_to_defaults() -> None:
    fetcher = ExternalSignalFetcher(
        satisfaction=StaticSatisfaction({"1": 90.0}),
        support=StaticSupport({"1": SupportRecord(3, 3)}, delay=5.0),
        timeout_seconds=0.05,
    )

    batch = await fetcher.fetch(["1"], since=NOW)

    assert batch.satisfaction_ok
    assert not batch.support_ok
    assert batch.for_account("1").satisfaction_score == 90.0
    assert batch.for_account("1").support is None
    assert batch.support_available == 0


@pytest.mark.asyncio
async def test_empty_id_set_skips_sources() -> None:
    satisfaction = StaticSatisfaction()
    support = StaticSupport()
    fetcher = ExternalSignalFetcher(satisfaction=satisfaction, support=support)

    batch = await fetcher.fetch([], since=NOW)

    assert satisfaction.calls == []
    assert support.calls == []
    assert batch.signals == {}


@pytest.mark.asyncio
async def test_unknown_account_reads_as_unavailable() -> None:
    fetcher = ExternalSignalFetcher(satisfaction=StaticSatisfaction(), support=StaticSupport())

    batch = await fetcher.fetch(["1"], since=NOW)

    assert batch.for_account("404").satisfaction_score is None
    assert batch.for_account("404").support is None


@pytest.mark.asyncio
async def test_simulated_sources_are_reproducible() -> None:
    ids = [str(i) for i in range(1, 21)]
    first = await SimulatedSatisfactionSource(seed=3, latency_ms=0).fetch_satisfaction(ids)
    second = await SimulatedSatisfactionSource(seed=3, latency_ms=0).fetch_satisfaction(ids)
    support_a = await SimulatedSupportSource(seed=3, latency_ms=0).fetch_support(ids, since=NOW)
    support_b = await SimulatedSupportSource(seed=3, latency_ms=0).fetch_support(ids, since=NOW)

    assert first == second
    assert support_a == support_b
    for value in first.values():
        assert value is None or 0 <= value <= 100
    for record in support_a.values():
        assert record is not None
        assert 0 <= record.open_critical_incidents <= 3
        assert 0 <= record.sla_breaches_in_window <= 2


@pytest.mark.asyncio
async def test_simulated_satisfaction_miss_rate_extremes() -> None:
    ids = ["1", "2", "abc"]

    always_missing = await SimulatedSatisfactionSource(miss_rate=1.0, latency_ms=0).fetch_satisfaction(ids)
    never_missing = await SimulatedSatisfactionSource(miss_rate=0.0, latency_ms=0).fetch_satisfaction(ids)

    assert set(always_missing.values()) == {None}
    assert all(v is not None for v in never_missing.values())
