"""
tests.test_api

HTTP surface of the account health workflow.

Responsibilities:
- Authorization header schemes resolve through the registry.
- Auth failures keep the "always answer" shape; bad parameters are rejected with 422.
"""

from __future__ import annotations

import httpx
import pytest

from customer_analytics.api.app import create_app
from customer_analytics.ledger.demo_data import build_demo_ledger
from customer_analytics.settings import Settings
from support import NOW, make_service


def _client() -> httpx.AsyncClient:
    ledger = build_demo_ledger(now=NOW)
    app = create_app(settings=Settings(env="test"), ledger=ledger, service=make_service(ledger))
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "authorization",
    [
        "ApiKey sk-admin-123456789",
        "Bearer eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.admin",
        "sk-admin-123456789",
    ],
)
async def test_admin_credentials_see_everything(authorization: str) -> None:
    async with _client() as client:
        r = await client.post(
            "/v1/account-health",
            json={"limit": 200},
            headers={"Authorization": authorization},
        )

    assert r.status_code == 200
    body = r.json()
    assert body["summary"]["total_analyzed"] == 20
    assert len(body["accounts"]) == 20
    first = body["accounts"][0]
    assert set(first) == {"account_id", "name", "health_score", "tier", "metrics", "reasons"}
    assert first["tier"] in ("good", "watch", "at_risk")


@pytest.mark.asyncio
async def test_readonly_key_is_capped() -> None:
    async with _client() as client:
        r = await client.post(
            "/v1/account-health",
            json={"limit": 200, "segment": "all"},
            headers={"Authorization": "ApiKey sk-readonly-555666777"},
        )

    assert r.status_code == 200
    assert len(r.json()["accounts"]) == 10


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"Authorization": "ApiKey sk-not-a-key"}, {"Authorization": "Bearer "}])
async def test_missing_or_invalid_credentials_get_empty_result(headers: dict[str, str]) -> None:
    async with _client() as client:
        r = await client.post("/v1/account-health", json={"segment": "highValue"}, headers=headers)

    assert r.status_code == 200
    body = r.json()
    assert body["accounts"] == []
    assert body["summary"]["total_analyzed"] == 0
    assert body["summary"]["segment_breakdown"] == {}
    assert body["summary"]["external_data_coverage"] == {
        "satisfaction_available": 0,
        "support_data_available": 0,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"window_days": 0},
        {"window_days": 366},
        {"limit": 0},
        {"limit": 201},
        {"segment": "vip"},
    ],
)
async def test_out_of_range_parameters_are_rejected(payload: dict[str, object]) -> None:
    async with _client() as client:
        r = await client.post(
            "/v1/account-health",
            json=payload,
            headers={"Authorization": "ApiKey sk-user-987654321"},
        )

    assert r.status_code == 422


@pytest.mark.asyncio
async def test_high_value_segment_over_http() -> None:
    async with _client() as client:
        r = await client.post(
            "/v1/account-health",
            json={"segment": "highValue", "window_days": 90, "include_reasons": False},
            headers={"Authorization": "ApiKey sk-user-987654321"},
        )

    body = r.json()
    assert body["accounts"]
    assert all(a["metrics"]["spend_in_window"] >= 100 for a in body["accounts"])
    assert all(a["reasons"] is None for a in body["accounts"])
