"""
customer_analytics.health

Account health domain.

Responsibilities:
- Windowed metric aggregation over the ledger.
- Composite scoring, tiering and reason codes.
- Segment filtering, ranking and role-based shaping.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Everything in this package is pure (no I/O); the only async step lives in `signals`.
