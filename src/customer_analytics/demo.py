"""
customer_analytics.demo

Command-line demo that runs the account health workflow as each built-in identity.

Usage:
    customer-analytics-demo --segment inactive --window-days 90 --limit 25
    customer-analytics-demo --token api_key_readonly_789 --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence

from customer_analytics.auth.registry import default_registry
from customer_analytics.auth.resolver import resolve_auth_context
from customer_analytics.health.models import AccountHealthRequest, AccountHealthResponse, Segment
from customer_analytics.ledger.demo_data import build_demo_ledger
from customer_analytics.observability.logging import configure_logging
from customer_analytics.services.health_service import AccountHealthService
from customer_analytics.settings import get_settings

SCENARIOS: tuple[tuple[str, str], ...] = (
    ("Admin", "api_key_admin_123"),
    ("Analyst", "api_key_user_456"),
    ("Readonly viewer", "api_key_readonly_789"),
    ("Unknown key", "api_key_not_registered"),
)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="customer-analytics-demo",
        description="Run the account health workflow for the demo identities.",
    )
    parser.add_argument("--segment", choices=[s.value for s in Segment], default=Segment.ALL.value)
    parser.add_argument("--window-days", type=int, default=90)
    parser.add_argument("--limit", type=int, default=50)
    parser.add_argument("--no-reasons", action="store_true", help="Omit reason codes.")
    parser.add_argument("--token", help="Run a single scenario with this credential.")
    parser.add_argument("--json", action="store_true", help="Print raw JSON responses.")
    return parser


def _print_response(title: str, status: str, response: AccountHealthResponse) -> None:
    summary = response.summary
    tiers = ",".join(f"{t.value}:{n}" for t, n in sorted(summary.segment_breakdown.items()))
    print(f"== {title} [{status}]")
    print(
        f"   analyzed={summary.total_analyzed} avg={summary.avg_health_score} tiers={tiers or '-'} "
        f"satisfaction_cov={summary.external_data_coverage.satisfaction_available} "
        f"support_cov={summary.external_data_coverage.support_data_available}"
    )
    for record in response.accounts:
        reasons = "; ".join(record.reasons or [])
        print(f"   {record.health_score:>3} {record.tier.value:<8} {record.account_id:>4} {record.name:<20} {reasons}")


async def _run(args: argparse.Namespace) -> int:
    settings = get_settings()
    registry = default_registry()
    service = AccountHealthService.from_settings(settings, ledger=build_demo_ledger())

    try:
        request = AccountHealthRequest(
            segment=Segment(args.segment),
            window_days=args.window_days,
            limit=args.limit,
            include_reasons=not args.no_reasons,
        )
    except ValueError as e:
        print(f"invalid parameters: {e}", file=sys.stderr)
        return 2

    scenarios = [("Custom credential", args.token)] if args.token else list(SCENARIOS)
    for title, token in scenarios:
        auth = resolve_auth_context(registry=registry, fallback_token=token)
        outcome = await service.run(auth=auth, request=request)
        if args.json:
            print(json.dumps({"scenario": title, "status": outcome.status, **outcome.response.model_dump(mode="json")}))
        else:
            _print_response(title, outcome.status, outcome.response)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = create_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(service_name=settings.service_name, level=settings.log_level, stream="stderr")
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
