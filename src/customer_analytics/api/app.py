"""
customer_analytics.api.app

FastAPI app factory for the Customer Analytics service.

Responsibilities:
- Build the FastAPI application and register routers/middleware (request context, CORS).
- Serve the MCP tool endpoint at `/mcp` next to the REST routes.
- Construct process-wide collaborators once: credential registry, ledger, workflow service.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from customer_analytics import __version__
from customer_analytics.api.routers.account_health import router as account_health_router
from customer_analytics.api.routers.health import router as health_router
from customer_analytics.api.routers.resources import router as resources_router
from customer_analytics.auth.registry import PrincipalRegistry, default_registry
from customer_analytics.ledger.demo_data import build_demo_ledger
from customer_analytics.ledger.models import Ledger
from customer_analytics.mcp_server.server import create_mcp_server
from customer_analytics.observability.logging import configure_logging, get_logger
from customer_analytics.observability.middleware import RequestContextMiddleware
from customer_analytics.services.health_service import AccountHealthService
from customer_analytics.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    ledger: Ledger | None = None,
    registry: PrincipalRegistry | None = None,
    service: AccountHealthService | None = None,
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    if ledger is None:
        ledger = build_demo_ledger()
    if registry is None:
        registry = default_registry()
    if service is None:
        service = AccountHealthService.from_settings(settings, ledger=ledger)

    mcp_server = create_mcp_server(settings=settings, registry=registry, service=service)
    mcp_http = mcp_server.streamable_http_app()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        log.info(
            "startup",
            env=settings.env,
            accounts=len(ledger.accounts),
            orders=len(ledger.orders),
            credentials=len(registry),
        )
        async with mcp_server.session_manager.run():
            yield
        log.info("shutdown")

    app = FastAPI(
        title="Customer Analytics",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Collaborators are immutable and shared across requests.
    app.state.settings = settings
    app.state.registry = registry
    app.state.ledger = ledger
    app.state.health_service = service
    app.state.mcp_server = mcp_server

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Mcp-Session-Id", "Mcp-Protocol-Version"],
        max_age=86400,
    )
    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(resources_router)
    app.include_router(account_health_router)
    app.router.routes.extend(mcp_http.routes)

    return app


# --- Module Notes -----------------------------------------------------------
# Business logic stays in services/orchestrator/health; this file only composes.
