"""
pizza_service.admin

Operator maintenance commands (`python -m pizza_service.admin`).
"""

# Package marker.
