"""
customer_analytics.auth.models

Auth domain models.

Responsibilities:
- Define the caller identity (`Principal`) and its tagged `Role`.
- Define the per-call `AuthContext` and the transport-supplied `TransportAuth` bundle.
- Encode the capability rule (admin bypass) in one visible place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"
    READONLY = "readonly"


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity.
    """

    id: str
    display_name: str
    role: Role
    permissions: frozenset[str]

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def has_capability(role: Role, permissions: frozenset[str], permission: str) -> bool:
    # Admin satisfies every check regardless of its explicit permission set.
    if role is Role.ADMIN:
        return True
    return permission in permissions


@dataclass(frozen=True, slots=True)
class TransportAuth:
    """
    Opaque bundle attached per call by a transport (HTTP header lookup, MCP auth info).

    `extra` carries `user_id`, `username`, `role` and `permissions`.
    """

    token: str
    client_id: str
    scopes: tuple[str, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class AuthContext:
    authenticated: bool
    principal: Principal | None = None
    session_id: str | None = None
    client_id: str | None = None

    @classmethod
    def anonymous(cls) -> AuthContext:
        return cls(authenticated=False)

    @property
    def role(self) -> Role | None:
        return self.principal.role if self.principal else None


# --- Module Notes -----------------------------------------------------------
# AuthContext is created once per invocation and dropped with the response; nothing here
# is ever persisted or cached across calls.
