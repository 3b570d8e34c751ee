"""
customer_analytics.api.routers.account_health

Account health workflow endpoint.

Responsibilities:
- Validate workflow parameters (FastAPI/pydantic, 422 on bad input).
- Resolve the caller from the Authorization header.
- Always answer with a well-formed response, including on auth failure.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from customer_analytics.api.deps import health_service_from_app
from customer_analytics.auth.deps import get_auth_context
from customer_analytics.auth.models import AuthContext
from customer_analytics.health.models import AccountHealthRequest, AccountHealthResponse
from customer_analytics.services.health_service import AccountHealthService

router = APIRouter(prefix="/v1", tags=["account-health"])


@router.post("/account-health", response_model=AccountHealthResponse)
async def compute_account_health(
    body: AccountHealthRequest,
    auth: AuthContext = Depends(get_auth_context),
    service: AccountHealthService = Depends(health_service_from_app),
) -> AccountHealthResponse:
    return await service.compute(auth=auth, request=body)
