"""
pizza_service.auth

Authentication/authorization package.

Responsibilities:
- Password hashing (credential store primitives).
- Session token issuing/decoding and signature extraction.
- Signature-based session registry (login/logout).
- FastAPI guard dependencies resolving the per-request `Caller`.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Route-specific policy (self-or-admin, franchise admins) lives with the routes and
# services; this package only supplies the primitives.
