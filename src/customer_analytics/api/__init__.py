"""
customer_analytics.api

HTTP transport (FastAPI).

Responsibilities:
- App factory, routers and request-scoped dependencies.
"""

# Package marker.
