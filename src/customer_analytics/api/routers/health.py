"""
customer_analytics.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) confirming the ledger is loaded.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from customer_analytics import __version__
from customer_analytics.api.deps import ledger_from_app, settings_from_app
from customer_analytics.ledger.models import Ledger
from customer_analytics.settings import Settings

router = APIRouter()


@router.get("/healthz")
async def healthz(settings: Settings = Depends(settings_from_app)) -> dict[str, str]:
    return {"status": "ok", "server": settings.service_name, "version": __version__}


@router.get("/readyz")
async def readyz(ledger: Ledger = Depends(ledger_from_app)) -> dict[str, str]:
    if not ledger.accounts:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Ledger is empty")
    return {"status": "ready"}
