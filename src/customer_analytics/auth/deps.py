"""
customer_analytics.auth.deps

Authorization header handling and FastAPI dependency functions.

Responsibilities:
- Extract a credential from the `Authorization` header (`Bearer`, `ApiKey` or bare token).
- Look it up in the app's registry for the channel its scheme names and attach a
  `TransportAuth` bundle.
- Resolve the per-request `AuthContext`.
"""

from __future__ import annotations

from fastapi import Depends, Header, Request

from customer_analytics.auth.models import AuthContext, TransportAuth
from customer_analytics.auth.registry import CredentialKind, PrincipalRegistry
from customer_analytics.auth.resolver import mask_token, resolve_auth_context
from customer_analytics.observability.logging import get_logger

log = get_logger(__name__)

_SCHEMES = {"bearer": CredentialKind.BEARER, "apikey": CredentialKind.API_KEY}


def registry_from_app(request: Request) -> PrincipalRegistry:
    # The registry is built once in `customer_analytics.api.app.create_app`.
    return request.app.state.registry  # type: ignore[attr-defined]


def extract_credential(authorization: str | None) -> tuple[CredentialKind, str] | None:
    """
    `Bearer <token>` names a bearer token; `ApiKey <key>` and a bare value name an API key.
    """

    value = (authorization or "").strip()
    parts = value.split(None, 1)
    if not parts:
        return None
    kind = _SCHEMES.get(parts[0].lower())
    if kind is None:
        return CredentialKind.API_KEY, value
    if len(parts) < 2:
        return None
    return kind, parts[1].strip()


def transport_auth_from_header(
    authorization: str | None,
    registry: PrincipalRegistry,
) -> TransportAuth | None:
    credential = extract_credential(authorization)
    if credential is None:
        log.info("auth.header_missing")
        return None

    kind, token = credential
    entry = registry.lookup(token, kind=kind)
    if entry is None:
        log.warning("auth.header_invalid", scheme=kind.value, token=mask_token(token))
        return None
    return entry.to_transport_auth()


def get_transport_auth(
    authorization: str | None = Header(default=None),
    registry: PrincipalRegistry = Depends(registry_from_app),
) -> TransportAuth | None:
    return transport_auth_from_header(authorization, registry)


def get_auth_context(
    transport: TransportAuth | None = Depends(get_transport_auth),
    registry: PrincipalRegistry = Depends(registry_from_app),
    x_session_id: str | None = Header(default=None),
) -> AuthContext:
    # HTTP callers carry their own credential channel, so no environment fallback here.
    if transport is None:
        return AuthContext.anonymous()
    return resolve_auth_context(registry=registry, transport=transport, session_id=x_session_id)


# --- Module Notes -----------------------------------------------------------
# Missing or unknown credentials are not rejected here with 401: the workflow endpoint
# keeps its "always answer" contract and returns the empty result instead.
