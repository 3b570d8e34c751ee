"""
customer_analytics.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, ledger and the workflow service.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Request

from customer_analytics.ledger.models import Ledger
from customer_analytics.services.health_service import AccountHealthService
from customer_analytics.settings import Settings


def settings_from_app(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def ledger_from_app(request: Request) -> Ledger:
    return request.app.state.ledger  # type: ignore[attr-defined]


def health_service_from_app(request: Request) -> AccountHealthService:
    # Built once in `customer_analytics.api.app.create_app`.
    return request.app.state.health_service  # type: ignore[attr-defined]
