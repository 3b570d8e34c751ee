"""
customer_analytics.signals

External per-account signals.

Responsibilities:
- Source interfaces for satisfaction and support-incident systems.
- Simulated sources used in place of real integrations.
- Fan-out/fan-in fetcher that degrades per branch instead of failing the batch.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The workflow depends on `ExternalSignalFetcher` and the source protocols, never on a
# concrete source, so real clients can replace the simulated ones.
