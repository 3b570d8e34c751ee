"""
customer_analytics.auth

Authentication/authorization package.

Responsibilities:
- Immutable credential registry (token -> Principal).
- AuthContext resolution for every transport.
- Permission gate with an explicit admin bypass.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Credentials are matched verbatim; there is no signature verification in this service.
