"""
customer_analytics.orchestrator

Account health workflow (LangGraph state machine).

Responsibilities:
- Typed state schema, nodes, routing, and graph compilation.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Call sites should go through `customer_analytics.services.health_service`, which owns the
# "always answer" boundary.
