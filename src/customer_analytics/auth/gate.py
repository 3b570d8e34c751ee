"""
customer_analytics.auth.gate

Permission gate.

Responsibilities:
- Enforce authentication first, then capability.
- Raise typed errors; no other side effects.
"""

from __future__ import annotations

from customer_analytics.auth.models import AuthContext, Principal, has_capability
from customer_analytics.errors import AuthenticationRequired, InsufficientPermission


def require(context: AuthContext, permission: str | None = None) -> Principal:
    if not context.authenticated or context.principal is None:
        raise AuthenticationRequired()

    principal = context.principal
    if permission and not has_capability(principal.role, principal.permissions, permission):
        raise InsufficientPermission(permission)
    return principal
