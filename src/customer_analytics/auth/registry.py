"""
customer_analytics.auth.registry

Fixed credential registry.

Responsibilities:
- Map opaque tokens to principals by exact match (no decoding).
- Tag each credential with the channel it is valid on (local key, HTTP API key, bearer).
- Stay immutable after construction so it can be shared across concurrent calls.
- Provide the built-in demo identities for stdio, HTTP API-key and bearer callers.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from customer_analytics.auth.models import Principal, Role, TransportAuth


class CredentialKind(str, Enum):
    LOCAL = "local"
    API_KEY = "api_key"
    BEARER = "bearer"


@dataclass(frozen=True, slots=True)
class RegisteredCredential:
    token: str
    client_id: str
    kind: CredentialKind
    scopes: tuple[str, ...]
    principal: Principal

    def to_transport_auth(self) -> TransportAuth:
        return TransportAuth(
            token=self.token,
            client_id=self.client_id,
            scopes=self.scopes,
            extra={
                "user_id": self.principal.id,
                "username": self.principal.display_name,
                "role": self.principal.role.value,
                "permissions": sorted(self.principal.permissions),
            },
        )


class PrincipalRegistry:
    def __init__(self, entries: Iterable[RegisteredCredential]) -> None:
        by_token: dict[str, RegisteredCredential] = {}
        for entry in entries:
            if entry.token in by_token:
                raise ValueError(f"duplicate credential for client {entry.client_id!r}")
            by_token[entry.token] = entry
        self._by_token = MappingProxyType(by_token)

    def lookup(
        self,
        token: str | None,
        *,
        kind: CredentialKind | None = None,
    ) -> RegisteredCredential | None:
        """
        Exact-match lookup. With `kind`, a token registered for another channel is a miss.
        """

        if not token:
            return None
        entry = self._by_token.get(token)
        if entry is None or (kind is not None and entry.kind is not kind):
            return None
        return entry

    def __len__(self) -> int:
        return len(self._by_token)

    def __iter__(self) -> Iterator[RegisteredCredential]:
        return iter(self._by_token.values())


_FULL = ("read:all", "write:all", "delete:all")
_ANALYST = ("read:users", "read:orders")
_VIEWER = ("read:users",)


def _cred(
    token: str,
    client_id: str,
    kind: CredentialKind,
    *,
    user_id: str,
    username: str,
    role: Role,
    permissions: tuple[str, ...],
) -> RegisteredCredential:
    return RegisteredCredential(
        token=token,
        client_id=client_id,
        kind=kind,
        scopes=permissions,
        principal=Principal(
            id=user_id,
            display_name=username,
            role=role,
            permissions=frozenset(permissions),
        ),
    )


def default_registry() -> PrincipalRegistry:
    """
    Demo identities. Built once at process start and injected into transports.
    """

    local, api_key, bearer = CredentialKind.LOCAL, CredentialKind.API_KEY, CredentialKind.BEARER
    return PrincipalRegistry(
        [
            # stdio / environment-selected keys
            _cred("api_key_admin_123", "demo-admin-client", local, user_id="admin-1", username="admin", role=Role.ADMIN, permissions=_FULL),
            _cred("api_key_user_456", "demo-user-client", local, user_id="user-1", username="analyst", role=Role.USER, permissions=_ANALYST),
            _cred("api_key_readonly_789", "demo-readonly-client", local, user_id="readonly-1", username="viewer", role=Role.READONLY, permissions=_VIEWER),
            # HTTP API keys
            _cred("sk-admin-123456789", "http-admin-client", api_key, user_id="admin-1", username="admin", role=Role.ADMIN, permissions=_FULL),
            _cred("sk-user-987654321", "http-user-client", api_key, user_id="user-1", username="analyst", role=Role.USER, permissions=_ANALYST),
            _cred("sk-readonly-555666777", "http-readonly-client", api_key, user_id="readonly-1", username="viewer", role=Role.READONLY, permissions=_VIEWER),
            # HTTP bearer tokens (opaque; matched verbatim)
            _cred("eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.admin", "http-jwt-admin-client", bearer, user_id="jwt-admin-1", username="jwt-admin", role=Role.ADMIN, permissions=_FULL),
            _cred("eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.user", "http-jwt-user-client", bearer, user_id="jwt-user-1", username="jwt-user", role=Role.USER, permissions=_ANALYST),
        ]
    )
