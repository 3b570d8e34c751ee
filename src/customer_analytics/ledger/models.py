"""
customer_analytics.ledger.models

Ledger records.

Responsibilities:
- Define `Account` (the "users" relation) and `Order` (the "orders" relation).
- Bundle them into an immutable `Ledger` that the workflow only ever reads.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True, slots=True)
class Account:
    id: str
    name: str
    city: str
    joined: date


@dataclass(frozen=True, slots=True)
class Order:
    id: str
    account_id: str
    total: float
    created_at: datetime

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ValueError(f"order {self.id} has negative total")
        if self.created_at.tzinfo is None:
            raise ValueError(f"order {self.id} created_at must be timezone-aware")


@dataclass(frozen=True, slots=True)
class Ledger:
    accounts: tuple[Account, ...]
    orders: tuple[Order, ...]

    @classmethod
    def of(cls, accounts: Iterable[Account], orders: Iterable[Order]) -> Ledger:
        return cls(accounts=tuple(accounts), orders=tuple(orders))

    def orders_by_account(self) -> dict[str, list[Order]]:
        grouped: dict[str, list[Order]] = {a.id: [] for a in self.accounts}
        for order in self.orders:
            grouped.setdefault(order.account_id, []).append(order)
        return grouped
