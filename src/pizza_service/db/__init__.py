"""
pizza_service.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services talk to repositories only; swapping SQLite for MySQL/Postgres is a
# `database_url` change.
