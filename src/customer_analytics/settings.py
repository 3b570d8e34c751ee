"""
customer_analytics.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., the fallback demo credential).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Single settings object injected across layers (API, MCP transport, services).
    """

    model_config = SettingsConfigDict(env_prefix="CA_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "customer-analytics"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3001
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Auth: credential used when the transport attaches none (stdio, CLI).
    demo_api_key: str = Field(default="api_key_user_456", repr=False)

    # External signals
    signal_timeout_seconds: float = Field(default=2.0, gt=0)
    signal_seed: int = 7
    satisfaction_miss_rate: float = Field(default=0.2, ge=0.0, le=1.0)
    satisfaction_latency_ms: int = Field(default=50, ge=0)
    support_latency_ms: int = Field(default=30, ge=0)

    # Workflow guardrails
    prefetch_cap: int = Field(default=500, gt=0)
    readonly_result_cap: int = Field(default=10, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests construct `Settings(env="test", ...)` directly instead of going through the cache.
