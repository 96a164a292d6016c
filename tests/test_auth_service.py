"""
tests.test_auth_service

Service-level rules that the HTTP tests do not reach directly.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pizza_service.auth.models import Caller, RoleAssignment, RoleKind
from pizza_service.auth.tokens import JwtConfig, TokenIssuer
from pizza_service.db.repositories.franchises import FranchiseRepo
from pizza_service.db.repositories.users import UserRepo
from pizza_service.errors import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from pizza_service.services.auth_service import AuthService


def _svc(session: AsyncSession, issuer: TokenIssuer) -> AuthService:
    return AuthService(session=session, issuer=issuer, bcrypt_rounds=4)


@pytest.mark.asyncio
async def test_franchisee_role_requires_existing_franchise(
    session_factory: async_sessionmaker[AsyncSession], issuer: TokenIssuer
) -> None:
    async with session_factory() as session:
        svc = _svc(session, issuer)
        with pytest.raises(ValidationError):
            await svc.create_user(
                name="f",
                email="f@test.com",
                password="p",
                roles=[RoleAssignment(RoleKind.franchisee, 404)],
            )
        assert await UserRepo(session).get_by_email("f@test.com") is None

        franchise = await FranchiseRepo(session).create(name="pizzaPocket")
        await session.commit()
        user = await svc.create_user(
            name="f",
            email="f@test.com",
            password="p",
            roles=[RoleAssignment(RoleKind.franchisee, franchise.id)],
        )
        assert user.role_assignments() == (RoleAssignment(RoleKind.franchisee, franchise.id),)


@pytest.mark.asyncio
async def test_login_token_carries_scoped_roles(
    session_factory: async_sessionmaker[AsyncSession], issuer: TokenIssuer
) -> None:
    async with session_factory() as session:
        franchise = await FranchiseRepo(session).create(name="pizzaPocket")
        await session.commit()
        svc = _svc(session, issuer)
        await svc.create_user(
            name="f",
            email="f@test.com",
            password="p",
            roles=[
                RoleAssignment(RoleKind.diner),
                RoleAssignment(RoleKind.franchisee, franchise.id),
            ],
        )

        result = await svc.login(email="f@test.com", password="p")
        claims = issuer.decode(result.token)
        assert claims.roles == (
            RoleAssignment(RoleKind.diner),
            RoleAssignment(RoleKind.franchisee, franchise.id),
        )


@pytest.mark.asyncio
async def test_login_failure_does_not_reveal_which_part_was_wrong(
    session_factory: async_sessionmaker[AsyncSession], issuer: TokenIssuer
) -> None:
    async with session_factory() as session:
        svc = _svc(session, issuer)
        await svc.create_user(
            name="d", email="d@test.com", password="p", roles=[RoleAssignment(RoleKind.diner)]
        )
        with pytest.raises(AuthenticationError) as wrong:
            await svc.login(email="d@test.com", password="nope")
        with pytest.raises(AuthenticationError) as unknown:
            await svc.login(email="ghost@test.com", password="p")
        assert wrong.value.message == unknown.value.message


@pytest.mark.asyncio
async def test_promote_admin_replaces_roles(
    session_factory: async_sessionmaker[AsyncSession], issuer: TokenIssuer
) -> None:
    async with session_factory() as session:
        svc = _svc(session, issuer)
        user = await svc.create_user(
            name="d", email="d@test.com", password="p", roles=[RoleAssignment(RoleKind.diner)]
        )
        await svc.promote_admin("d@test.com")

    async with session_factory() as session:
        reloaded = await UserRepo(session).get(user.id)
        assert reloaded is not None
        assert reloaded.role_assignments() == (RoleAssignment(RoleKind.admin),)

        with pytest.raises(NotFoundError):
            await _svc(session, issuer).promote_admin("ghost@test.com")


@pytest.mark.asyncio
async def test_update_email_race_is_a_conflict(
    session_factory: async_sessionmaker[AsyncSession], issuer: TokenIssuer
) -> None:
    async with session_factory() as session:
        svc = _svc(session, issuer)
        await svc.create_user(
            name="a", email="a@test.com", password="p", roles=[RoleAssignment(RoleKind.diner)]
        )
        b = await svc.create_user(
            name="b", email="b@test.com", password="p", roles=[RoleAssignment(RoleKind.diner)]
        )
        caller = Caller(id=b.id, name="b", email="b@test.com", roles=(), token="a.b.c")
        # The duplicate check passes, as when a concurrent update claims the email right after it.
        svc._users.get_by_email = AsyncMock(return_value=None)  # type: ignore[method-assign]

        with pytest.raises(ConflictError):
            await svc.update_user(caller, b.id, email="a@test.com")

    async with session_factory() as session:
        reloaded = await UserRepo(session).get(b.id)
        assert reloaded is not None
        assert reloaded.email == "b@test.com"


@pytest.mark.asyncio
async def test_register_checks_signing_secret_before_persisting(
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    unsigned = TokenIssuer(JwtConfig(alg="HS256", issuer="pizza-service", secret=""))
    async with session_factory() as session:
        with pytest.raises(ConfigurationError):
            await _svc(session, unsigned).register(name="d", email="d@test.com", password="p")
        assert await UserRepo(session).get_by_email("d@test.com") is None
