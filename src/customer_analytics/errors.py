"""
customer_analytics.errors

Domain exceptions raised by the permission gate.

Responsibilities:
- Give auth failures distinct types so the service layer can tell "denied" apart
  from "nothing matched" in logs and tests.
"""

from __future__ import annotations


class CustomerAnalyticsError(Exception):
    pass


class AuthenticationRequired(CustomerAnalyticsError):
    def __init__(self) -> None:
        super().__init__("Authentication required. Please provide valid credentials.")


class InsufficientPermission(CustomerAnalyticsError):
    def __init__(self, permission: str) -> None:
        super().__init__(f"Insufficient permissions. Required: {permission}")
        self.permission = permission


# --- Module Notes -----------------------------------------------------------
# Signal-source outages are deliberately not exceptions here; they are data (None/0 defaults).
