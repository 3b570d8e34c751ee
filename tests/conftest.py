from __future__ import annotations

import pytest

from customer_analytics.auth.registry import PrincipalRegistry, default_registry


@pytest.fixture
def registry() -> PrincipalRegistry:
    return default_registry()
