"""
tests.test_metrics

Windowed metric aggregation over the ledger.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from customer_analytics.health.metrics import (
    NO_ORDER_AGE_DAYS,
    aggregate_metrics,
    spend_delta_percent,
)
from customer_analytics.ledger.models import Ledger, Order
from support import NOW, make_ledger


def test_spend_delta_edge_cases() -> None:
    assert spend_delta_percent(0, 0) == 0
    # No prior spend: the denominator floors at 1.
    assert spend_delta_percent(150, 0) == 15000
    assert spend_delta_percent(0, 200) == -100
    assert spend_delta_percent(300, 50) == 500
    assert spend_delta_percent(1, 0.5) == pytest.approx(50.0)


def test_windows_are_adjacent_and_half_open() -> None:
    ledger = make_ledger({"1": [(300, 10), (50, 120)]})

    (snapshot,) = aggregate_metrics(ledger, now=NOW, window_days=90)

    assert snapshot.last_order_age_days == 10
    assert snapshot.order_count_in_window == 1
    assert snapshot.spend_in_window == 300
    assert snapshot.spend_in_prior_window == 50
    assert snapshot.spend_delta_percent == 500


def test_window_boundaries() -> None:
    # Exactly `window` ago belongs to the current window; exactly `2*window` ago to the prior one.
    ledger = make_ledger({"1": [(10, 30), (20, 60), (40, 0)]})

    (snapshot,) = aggregate_metrics(ledger, now=NOW, window_days=30)

    assert snapshot.order_count_in_window == 1
    assert snapshot.spend_in_window == 10
    assert snapshot.spend_in_prior_window == 20


def test_orders_at_or_after_now_are_outside_the_window() -> None:
    ledger = Ledger.of(
        make_ledger({"1": []}).accounts,
        [Order(id="f", account_id="1", total=99, created_at=NOW + timedelta(days=2))],
    )

    (snapshot,) = aggregate_metrics(ledger, now=NOW, window_days=30)

    assert snapshot.order_count_in_window == 0
    assert snapshot.last_order_age_days == 0


def test_account_without_orders_uses_sentinel_age() -> None:
    ledger = make_ledger({"1": [(10, 5)], "2": []})

    snapshots = {s.account_id: s for s in aggregate_metrics(ledger, now=NOW, window_days=90)}

    assert snapshots["2"].last_order_age_days == NO_ORDER_AGE_DAYS
    assert snapshots["2"].spend_delta_percent == 0
    assert snapshots["1"].last_order_age_days == 5


def test_age_is_whole_days() -> None:
    ledger = make_ledger({"1": [(10, 2.9)]})

    (snapshot,) = aggregate_metrics(ledger, now=NOW, window_days=90)

    assert snapshot.last_order_age_days == 2


def test_aggregation_is_deterministic() -> None:
    ledger = make_ledger({"1": [(10, 5), (30, 100)], "2": [(5, 1)]})

    assert aggregate_metrics(ledger, now=NOW, window_days=45) == aggregate_metrics(
        ledger, now=NOW, window_days=45
    )


def test_rejects_non_positive_window() -> None:
    with pytest.raises(ValueError):
        aggregate_metrics(make_ledger({"1": []}), now=NOW, window_days=0)


def test_order_rejects_negative_total() -> None:
    with pytest.raises(ValueError):
        Order(id="x", account_id="1", total=-1, created_at=NOW)
