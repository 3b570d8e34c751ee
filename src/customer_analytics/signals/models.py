"""
customer_analytics.signals.models

External signal value types.

Responsibilities:
- Represent "unavailable" explicitly (None) instead of raising.
- Carry per-batch branch availability for coverage reporting.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class SupportRecord:
    open_critical_incidents: int = 0
    sla_breaches_in_window: int = 0


@dataclass(frozen=True, slots=True)
class ExternalSignal:
    satisfaction_score: float | None = None
    support: SupportRecord | None = None

    @property
    def open_critical_incidents(self) -> int:
        return self.support.open_critical_incidents if self.support else 0

    @property
    def sla_breaches_in_window(self) -> int:
        return self.support.sla_breaches_in_window if self.support else 0


_UNAVAILABLE = ExternalSignal()


@dataclass(frozen=True, slots=True)
class SignalBatch:
    signals: Mapping[str, ExternalSignal] = field(default_factory=lambda: MappingProxyType({}))
    satisfaction_ok: bool = True
    support_ok: bool = True

    @classmethod
    def empty(cls) -> SignalBatch:
        return cls()

    def for_account(self, account_id: str) -> ExternalSignal:
        return self.signals.get(account_id, _UNAVAILABLE)

    @property
    def satisfaction_available(self) -> int:
        return sum(1 for s in self.signals.values() if s.satisfaction_score is not None)

    @property
    def support_available(self) -> int:
        return sum(1 for s in self.signals.values() if s.support is not None)
