"""
customer_analytics.ledger

Read-only order ledger.

Responsibilities:
- Immutable account/order records supplied at process start.
- Demo dataset used by the HTTP, stdio and CLI entrypoints.
"""

# Package marker.
