"""
customer_analytics.mcp_server

Tool-calling transport (MCP), served over stdio or mounted on the HTTP app at `/mcp`.

Responsibilities:
- Expose the account health workflow as an MCP tool and the schema as a resource.
"""

# Package marker.
