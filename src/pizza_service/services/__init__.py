"""
pizza_service.services

Service layer package.

Responsibilities:
- Own transaction boundaries and compose repositories, token issuing and the
  session registry into the auth flows.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services raise `pizza_service.errors` exceptions; the API layer renders them.
