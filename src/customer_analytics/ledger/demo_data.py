"""
customer_analytics.ledger.demo_data

Demo dataset.

Responsibilities:
- Provide a small users/orders dataset with a mix of healthy, declining and dormant accounts.
- Materialize order timestamps relative to a reference instant so the demo stays meaningful.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

from customer_analytics.ledger.models import Account, Ledger, Order

_ACCOUNTS: tuple[tuple[int, str, str, str], ...] = (
    (1, "Ada Lovelace", "London", "2021-03-14"),
    (2, "Grace Hopper", "New York", "2020-11-02"),
    (3, "Alan Turing", "Manchester", "2022-01-20"),
    (4, "Katherine Johnson", "Hampton", "2021-07-08"),
    (5, "Linus Torvalds", "Portland", "2019-05-30"),
    (6, "Margaret Hamilton", "Boston", "2022-06-11"),
    (7, "Dennis Ritchie", "Murray Hill", "2020-02-17"),
    (8, "Barbara Liskov", "Cambridge", "2023-01-05"),
    (9, "Ken Thompson", "Berkeley", "2021-09-23"),
    (10, "Frances Allen", "Peru", "2022-10-01"),
    (11, "John Backus", "Philadelphia", "2020-04-12"),
    (12, "Radia Perlman", "Seattle", "2023-03-19"),
    (13, "Edsger Dijkstra", "Austin", "2019-12-03"),
    (14, "Hedy Lamarr", "Vienna", "2021-02-28"),
    (15, "Tim Berners-Lee", "Geneva", "2020-08-06"),
    (16, "Shafi Goldwasser", "Rehovot", "2022-04-22"),
    (17, "Guido van Rossum", "Amsterdam", "2019-02-20"),
    (18, "Annie Easley", "Cleveland", "2023-05-09"),
    (19, "Donald Knuth", "Stanford", "2020-01-10"),
    (20, "Joan Clarke", "Bletchley", "2022-12-15"),
)

# (order id, account id, total, days before the reference instant)
_ORDERS: tuple[tuple[int, int, float, int], ...] = (
    (101, 1, 120.0, 3),
    (102, 1, 89.5, 21),
    (103, 1, 64.0, 110),
    (104, 2, 250.0, 8),
    (105, 2, 310.0, 95),
    (106, 2, 180.0, 130),
    (107, 3, 45.0, 70),
    (108, 3, 60.0, 150),
    (109, 4, 15.0, 12),
    (110, 4, 22.5, 40),
    (111, 5, 500.0, 1),
    (112, 5, 420.0, 60),
    (113, 5, 390.0, 120),
    (114, 6, 75.0, 200),
    (115, 7, 33.0, 30),
    (116, 7, 410.0, 100),
    (117, 8, 99.0, 5),
    (118, 8, 1.0, 6),
    (119, 9, 140.0, 160),
    (120, 10, 18.0, 2),
    (121, 10, 12.0, 95),
    (122, 11, 260.0, 50),
    (123, 11, 40.0, 140),
    (124, 12, 85.0, 15),
    (125, 12, 85.0, 105),
    (126, 13, 700.0, 175),
    (127, 14, 55.0, 47),
    (128, 15, 130.0, 9),
    (129, 15, 20.0, 99),
    (130, 16, 300.0, 25),
    (131, 16, 50.0, 115),
    (132, 17, 95.0, 62),
    (133, 17, 240.0, 92),
    (134, 18, 10.0, 1),
    (135, 19, 610.0, 14),
    (136, 19, 580.0, 101),
)


def build_demo_ledger(*, now: datetime | None = None) -> Ledger:
    now = now or datetime.now(tz=UTC)
    accounts = [
        Account(id=str(uid), name=name, city=city, joined=date.fromisoformat(joined))
        for uid, name, city, joined in _ACCOUNTS
    ]
    orders = [
        Order(
            id=str(oid),
            account_id=str(uid),
            total=total,
            created_at=now - timedelta(days=days_ago),
        )
        for oid, uid, total, days_ago in _ORDERS
    ]
    return Ledger.of(accounts, orders)


# --- Module Notes -----------------------------------------------------------
# Account 20 has no orders on purpose (exercises the 999-day sentinel).
