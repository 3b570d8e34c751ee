"""
tests.support

Shared test helpers: a fixed clock, ledger builders and in-memory signal sources.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, date, datetime, timedelta

from customer_analytics.auth.models import AuthContext, Principal, Role
from customer_analytics.ledger.models import Account, Ledger, Order
from customer_analytics.services.health_service import AccountHealthService
from customer_analytics.signals.fetcher import ExternalSignalFetcher
from customer_analytics.signals.models import SupportRecord

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


def make_ledger(
    history: Mapping[str, Sequence[tuple[float, float]]],
    *,
    now: datetime = NOW,
) -> Ledger:
    """
    Build a ledger from `{account_id: [(total, days_ago), ...]}`.
    """

    accounts = [
        Account(id=aid, name=f"Account {aid}", city="Testville", joined=date(2020, 1, 1))
        for aid in history
    ]
    orders = []
    for aid, entries in history.items():
        for i, (total, days_ago) in enumerate(entries):
            orders.append(
                Order(
                    id=f"{aid}-{i}",
                    account_id=aid,
                    total=total,
                    created_at=now - timedelta(days=days_ago),
                )
            )
    return Ledger.of(accounts, orders)


def context_for(role: Role, permissions: Sequence[str] = ("read:users",)) -> AuthContext:
    return AuthContext(
        authenticated=True,
        principal=Principal(
            id=f"{role.value}-1",
            display_name=role.value,
            role=role,
            permissions=frozenset(permissions),
        ),
        session_id="test-session",
    )


class StaticSatisfaction:
    def __init__(
        self,
        values: Mapping[str, float | None] | None = None,
        *,
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.values = dict(values or {})
        self.delay = delay
        self.error = error
        self.calls: list[list[str]] = []

    async def fetch_satisfaction(self, account_ids: Sequence[str]) -> dict[str, float | None]:
        self.calls.append(list(account_ids))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return {aid: self.values.get(aid) for aid in account_ids}


class StaticSupport:
    def __init__(
        self,
        records: Mapping[str, SupportRecord | None] | None = None,
        *,
        default: SupportRecord | None = SupportRecord(),
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.records = dict(records or {})
        self.default = default
        self.delay = delay
        self.error = error
        self.calls: list[list[str]] = []
        self.since: list[datetime] = []

    async def fetch_support(
        self, account_ids: Sequence[str], *, since: datetime
    ) -> dict[str, SupportRecord | None]:
        self.calls.append(list(account_ids))
        self.since.append(since)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return {aid: self.records.get(aid, self.default) for aid in account_ids}


def make_service(
    ledger: Ledger,
    *,
    satisfaction: StaticSatisfaction | None = None,
    support: StaticSupport | None = None,
    timeout_seconds: float = 1.0,
    prefetch_cap: int = 500,
    readonly_cap: int = 10,
    clock: Callable[[], datetime] = lambda: NOW,
) -> AccountHealthService:
    fetcher = ExternalSignalFetcher(
        satisfaction=satisfaction or StaticSatisfaction(),
        support=support or StaticSupport(),
        timeout_seconds=timeout_seconds,
    )
    return AccountHealthService(
        ledger=ledger,
        fetcher=fetcher,
        prefetch_cap=prefetch_cap,
        readonly_cap=readonly_cap,
        clock=clock,
    )
