"""
customer_analytics.auth.resolver

AuthContext resolution.

Responsibilities:
- Turn a transport bundle, or the configured fallback credential, into an `AuthContext`.
- Accept a bundle only when its token is registered and its claims match the registry.
- Never raise: anything unresolvable becomes an anonymous context.
- Log who was resolved without ever logging a full secret.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from customer_analytics.auth.models import AuthContext, Principal, Role, TransportAuth
from customer_analytics.auth.registry import PrincipalRegistry
from customer_analytics.observability.logging import get_logger

log = get_logger(__name__)


def mask_token(token: str | None) -> str:
    if not token:
        return "<none>"
    if len(token) <= 6:
        return "***"
    return f"{token[:6]}..."


def resolve_auth_context(
    *,
    registry: PrincipalRegistry,
    transport: TransportAuth | None = None,
    fallback_token: str | None = None,
    session_id: str | None = None,
) -> AuthContext:
    if transport is not None:
        return _from_transport(registry, transport, session_id)

    entry = registry.lookup(fallback_token)
    if entry is None:
        log.warning("auth.unresolved", token=mask_token(fallback_token))
        return AuthContext.anonymous()

    log.info(
        "auth.resolved",
        source="environment",
        username=entry.principal.display_name,
        role=entry.principal.role.value,
    )
    return AuthContext(
        authenticated=True,
        principal=entry.principal,
        session_id=session_id or "local-session",
        client_id=entry.client_id,
    )


def _from_transport(
    registry: PrincipalRegistry,
    transport: TransportAuth,
    session_id: str | None,
) -> AuthContext:
    # The bundle's token must be registered; its claims may only restate the registered identity.
    entry = registry.lookup(transport.token)
    if entry is None:
        log.warning(
            "auth.transport_rejected",
            reason="unregistered_token",
            client_id=transport.client_id,
            token=mask_token(transport.token),
        )
        return AuthContext.anonymous()

    if transport.extra and _principal_from_extra(transport.extra) != entry.principal:
        log.warning(
            "auth.transport_rejected",
            reason="claims_mismatch",
            client_id=transport.client_id,
            token=mask_token(transport.token),
        )
        return AuthContext.anonymous()

    log.info(
        "auth.resolved",
        source="transport",
        username=entry.principal.display_name,
        role=entry.principal.role.value,
    )
    return AuthContext(
        authenticated=True,
        principal=entry.principal,
        session_id=session_id,
        client_id=entry.client_id,
    )


def _principal_from_extra(extra: Mapping[str, Any]) -> Principal | None:
    user_id = str(extra.get("user_id") or "")
    if not user_id:
        return None
    try:
        role = Role(str(extra.get("role", "")))
    except ValueError:
        return None
    permissions = extra.get("permissions") or []
    if not isinstance(permissions, (list, tuple, set, frozenset)):
        return None
    return Principal(
        id=user_id,
        display_name=str(extra.get("username") or user_id),
        role=role,
        permissions=frozenset(str(p) for p in permissions),
    )
