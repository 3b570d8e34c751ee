"""
customer_analytics.api.routers.resources

Read-only resources over HTTP.

Responsibilities:
- Serve the ledger schema description as plain text (same text as `schema://main`).
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from customer_analytics.resources import SCHEMA_TEXT

router = APIRouter(prefix="/v1/resources", tags=["resources"])


@router.get("/schema", response_class=PlainTextResponse)
async def schema() -> str:
    return SCHEMA_TEXT
