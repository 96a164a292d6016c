"""
tests.test_sessions

Session registry behavior against a real (SQLite) store.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pizza_service.auth.models import RoleAssignment, RoleKind
from pizza_service.auth.sessions import SessionRegistry
from pizza_service.auth.tokens import TokenIssuer
from pizza_service.db.repositories.sessions import AuthSessionRepo
from pizza_service.db.repositories.users import UserRepo


async def _user_and_token(session: AsyncSession, issuer: TokenIssuer) -> tuple[int, str]:
    user = await UserRepo(session).create(
        name="pizza diner",
        email="diner@test.com",
        password_hash="x",
        roles=[RoleAssignment(RoleKind.diner)],
    )
    await session.commit()
    token = issuer.issue(
        user_id=user.id, name=user.name, email=user.email, roles=user.role_assignments()
    )
    return user.id, token


@pytest.mark.asyncio
async def test_activate_then_is_active(
    session_factory: async_sessionmaker[AsyncSession], issuer: TokenIssuer
) -> None:
    async with session_factory() as session:
        user_id, token = await _user_and_token(session, issuer)
        registry = SessionRegistry(session)
        assert not await registry.is_active(token)
        await registry.activate(user_id, token)
        assert await registry.is_active(token)

    # Visible to an independent session (durable, not just in the identity map).
    async with session_factory() as other:
        assert await SessionRegistry(other).is_active(token)


@pytest.mark.asyncio
async def test_activate_is_idempotent(
    session_factory: async_sessionmaker[AsyncSession], issuer: TokenIssuer
) -> None:
    async with session_factory() as session:
        user_id, token = await _user_and_token(session, issuer)
        registry = SessionRegistry(session)
        await registry.activate(user_id, token)
        await registry.activate(user_id, token)
        assert await AuthSessionRepo(session).count_for_user(user_id) == 1


@pytest.mark.asyncio
async def test_deactivate_twice_is_safe(
    session_factory: async_sessionmaker[AsyncSession], issuer: TokenIssuer
) -> None:
    async with session_factory() as session:
        user_id, token = await _user_and_token(session, issuer)
        registry = SessionRegistry(session)
        await registry.activate(user_id, token)

        await registry.deactivate(token)
        assert not await registry.is_active(token)
        await registry.deactivate(token)
        assert not await registry.is_active(token)


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["", "nodots", "one.dot"])
async def test_tokens_without_signature_are_inactive(
    session_factory: async_sessionmaker[AsyncSession], token: str
) -> None:
    async with session_factory() as session:
        registry = SessionRegistry(session)
        assert await registry.is_active(token) is False
        await registry.deactivate(token)


@pytest.mark.asyncio
async def test_deactivate_only_affects_that_signature(
    session_factory: async_sessionmaker[AsyncSession], issuer: TokenIssuer
) -> None:
    async with session_factory() as session:
        user_id, first = await _user_and_token(session, issuer)
        second = issuer.issue(
            user_id=user_id, name="pizza diner", email="diner@test.com", roles=[]
        )
        registry = SessionRegistry(session)
        await registry.activate(user_id, first)
        await registry.activate(user_id, second)

        await registry.deactivate(first)
        assert not await registry.is_active(first)
        assert await registry.is_active(second)


@pytest.mark.asyncio
async def test_bulk_maintenance(
    session_factory: async_sessionmaker[AsyncSession], issuer: TokenIssuer
) -> None:
    async with session_factory() as session:
        user_id, token = await _user_and_token(session, issuer)
        registry = SessionRegistry(session)
        await registry.activate(user_id, token)

        past = datetime.now(UTC).replace(tzinfo=None) - timedelta(hours=1)
        assert await registry.purge_older_than(past) == 0
        assert await registry.is_active(token)

        assert await registry.deactivate_all() == 1
        assert not await registry.is_active(token)
