"""
customer_analytics.health.metrics

Windowed transactional metrics per account.

Responsibilities:
- Fold the ledger into one `AccountMetricSnapshot` per account for a given `now` and window.
- Compare the current window `[now - w, now)` with the prior window `[now - 2w, now - w)`.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from customer_analytics.health.models import AccountMetricSnapshot
from customer_analytics.ledger.models import Ledger, Order

NO_ORDER_AGE_DAYS = 999

_DAY = timedelta(days=1)


def spend_delta_percent(current: float, prior: float) -> float:
    if current == 0 and prior == 0:
        return 0.0
    return (current - prior) / max(prior, 1) * 100


def last_order_age_days(orders: list[Order], *, now: datetime) -> int:
    if not orders:
        return NO_ORDER_AGE_DAYS
    latest = max(o.created_at for o in orders)
    # Future-dated orders count as "today", never negative.
    return max(0, (now - latest) // _DAY)


def aggregate_metrics(
    ledger: Ledger,
    *,
    now: datetime,
    window_days: int,
) -> list[AccountMetricSnapshot]:
    if window_days <= 0:
        raise ValueError("window_days must be positive")

    window = timedelta(days=window_days)
    since = now - window
    prior_since = since - window

    grouped = ledger.orders_by_account()
    snapshots: list[AccountMetricSnapshot] = []
    for account in ledger.accounts:
        orders = grouped.get(account.id, [])

        in_window = [o for o in orders if since <= o.created_at < now]
        in_prior = [o for o in orders if prior_since <= o.created_at < since]
        spend = sum(o.total for o in in_window)
        prior_spend = sum(o.total for o in in_prior)

        snapshots.append(
            AccountMetricSnapshot(
                account_id=account.id,
                name=account.name,
                last_order_age_days=last_order_age_days(orders, now=now),
                order_count_in_window=len(in_window),
                spend_in_window=spend,
                spend_in_prior_window=prior_spend,
                spend_delta_percent=spend_delta_percent(spend, prior_spend),
            )
        )
    return snapshots


# --- Module Notes -----------------------------------------------------------
# Orders whose account is missing from the ledger's accounts are ignored: a record needs a name.
