"""
customer_analytics.mcp_server.__main__

Entrypoint for running the stdio transport via `python -m customer_analytics.mcp_server`.
"""

from __future__ import annotations

from customer_analytics.auth.registry import default_registry
from customer_analytics.ledger.demo_data import build_demo_ledger
from customer_analytics.observability.logging import configure_logging, get_logger
from customer_analytics.services.health_service import AccountHealthService
from customer_analytics.settings import get_settings
from customer_analytics.mcp_server.server import create_mcp_server

log = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    # stdout carries JSON-RPC frames.
    configure_logging(service_name=settings.service_name, level=settings.log_level, stream="stderr")

    registry = default_registry()
    ledger = build_demo_ledger()
    service = AccountHealthService.from_settings(settings, ledger=ledger)
    server = create_mcp_server(settings=settings, registry=registry, service=service)

    fallback = registry.lookup(settings.demo_api_key)
    log.info(
        "startup",
        transport="stdio",
        auth_user=fallback.principal.display_name if fallback else None,
        auth_role=fallback.principal.role.value if fallback else None,
    )
    server.run()


if __name__ == "__main__":
    main()
