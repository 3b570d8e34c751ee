"""
customer_analytics.services

Service-layer package.

Responsibilities:
- Own the workflow invocation boundary shared by every transport.
- Convert gate/internal failures into the "always answer" response.
"""

# Package marker.
