"""
customer_analytics.resources

Static resource text shared by the HTTP and stdio transports.
"""

from __future__ import annotations

SCHEMA_URI = "schema://main"

SCHEMA_TEXT = """\
tables:
  users(id, name, city, joined)
  orders(id, user_id -> users.id, total, created)
notes:
  - read-only access
  - account health is computed over two adjacent windows of window_days each
examples:
  - "Which inactive accounts are most at risk?"
  - "Show high-value accounts with open critical incidents"
"""
