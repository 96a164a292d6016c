"""
pizza_service.api

API package for the pizza service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, error rendering and response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + auth + delegation to services.
