"""
customer_analytics.mcp_server.server

FastMCP server for the account health tool.

Responsibilities:
- Register `compute_account_health` and the `schema://main` resource.
- Resolve the caller per call: over HTTP from the request's `Authorization` header,
  over stdio from the configured fallback credential (stdio has no auth channel).
- Return the workflow response as plain JSON-compatible data.
"""

# FastMCP reads tool annotations at runtime, so they stay unstringified here.

from typing import Annotated, Any

from mcp.server.fastmcp import Context, FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field
from starlette.requests import Request

from customer_analytics.auth.deps import transport_auth_from_header
from customer_analytics.auth.models import AuthContext
from customer_analytics.auth.registry import PrincipalRegistry
from customer_analytics.auth.resolver import resolve_auth_context
from customer_analytics.health.models import AccountHealthRequest, Segment
from customer_analytics.resources import SCHEMA_TEXT, SCHEMA_URI
from customer_analytics.services.health_service import AccountHealthService
from customer_analytics.settings import Settings

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=False, openWorldHint=True)


def create_mcp_server(
    *,
    settings: Settings,
    registry: PrincipalRegistry,
    service: AccountHealthService,
) -> FastMCP:
    server = FastMCP(
        "customer-analytics",
        instructions=(
            "Customer analytics: health scoring that combines order history with "
            "satisfaction and support signals. Results are ordered worst-first."
        ),
        host=settings.api_host,
        port=settings.api_port,
        streamable_http_path="/mcp",
        stateless_http=True,
        json_response=True,
    )

    def caller(ctx: Context) -> AuthContext:
        request = _http_request(ctx)
        if request is None:
            return resolve_auth_context(registry=registry, fallback_token=settings.demo_api_key)

        transport = transport_auth_from_header(request.headers.get("authorization"), registry)
        if transport is None:
            return AuthContext.anonymous()
        return resolve_auth_context(
            registry=registry,
            transport=transport,
            session_id=request.headers.get("mcp-session-id"),
        )

    @server.resource(SCHEMA_URI, name="Database schema", mime_type="text/plain")
    def schema() -> str:
        """Complete database schema with examples."""
        return SCHEMA_TEXT

    @server.tool(annotations=READ_ONLY)
    async def compute_account_health(
        ctx: Context,
        segment: Segment = Segment.ALL,
        window_days: Annotated[int, Field(gt=0, le=365)] = 90,
        limit: Annotated[int, Field(gt=0, le=200)] = 50,
        include_reasons: bool = True,
    ) -> dict[str, Any]:
        """Analyze customer health by combining order data with external signals.

        Args:
            segment: 'all', 'inactive' (no order in 45+ days) or 'highValue' (100+ spend in window).
            window_days: Length of the analysis window; the prior window has the same length.
            limit: Maximum accounts to return (readonly callers are capped at 10).
            include_reasons: Attach human-readable reasons to each account.
        """
        request = AccountHealthRequest(
            segment=segment,
            window_days=window_days,
            limit=limit,
            include_reasons=include_reasons,
        )
        response = await service.compute(auth=caller(ctx), request=request)
        return response.model_dump(mode="json")

    return server


def _http_request(ctx: Context) -> Request | None:
    try:
        request_context = ctx.request_context
    except ValueError:
        # Invoked directly, outside any transport session.
        return None
    request = request_context.request
    return request if isinstance(request, Request) else None


# --- Module Notes -----------------------------------------------------------
# The HTTP endpoint is stateless and answers with plain JSON; every call authenticates
# from its own headers, and no credential falls back to the environment over HTTP.
