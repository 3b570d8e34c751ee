"""
customer_analytics.observability

Observability package.

Responsibilities:
- Structured logging configuration shared by the HTTP, stdio and CLI entrypoints.
- Request context propagation for consistent log enrichment.
"""

# Package marker.
