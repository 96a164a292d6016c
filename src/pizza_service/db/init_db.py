"""
pizza_service.db.init_db

DB initialization helpers.

Responsibilities:
- Create tables for local development and tests.
- Seed a default admin account when the user table is empty.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pizza_service.auth.models import RoleAssignment, RoleKind
from pizza_service.auth.passwords import hash_password_async
from pizza_service.db.base import Base
from pizza_service.db.repositories.users import UserRepo
from pizza_service.observability.logging import get_logger
from pizza_service.settings import Settings

log = get_logger(__name__)


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    Production should rely on Alembic migrations.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_admin(
    session_factory: async_sessionmaker[AsyncSession], settings: Settings
) -> bool:
    """Create the bootstrap admin if no users exist yet. Returns True when created."""

    async with session_factory() as session:
        users = UserRepo(session)
        if await users.count() > 0:
            return False
        password_hash = await hash_password_async(
            settings.bootstrap_admin_password, rounds=settings.bcrypt_rounds
        )
        user = await users.create(
            name=settings.bootstrap_admin_name,
            email=settings.bootstrap_admin_email,
            password_hash=password_hash,
            roles=[RoleAssignment(role=RoleKind.admin)],
        )
        await session.commit()
        log.info("admin_seeded", user_id=user.id, email=user.email)
        return True


# --- Module Notes -----------------------------------------------------------
# `init_db` is not used for prod; production workflows run Alembic migrations.
