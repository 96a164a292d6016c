from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI

from conftest import admin_login, bearer, random_email, register
from pizza_service.auth.models import RoleAssignment, RoleKind
from pizza_service.auth.tokens import JwtConfig, TokenIssuer
from pizza_service.db.repositories.franchises import FranchiseRepo
from pizza_service.services.auth_service import AuthService
from pizza_service.settings import Settings


async def _franchise_with_admin(app: FastAPI, settings: Settings) -> tuple[int, str]:
    email = random_email("franchise.com")
    async with app.state.sessionmaker() as session:
        franchise = await FranchiseRepo(session).create(name="pizzaPocket")
        await session.commit()
        await AuthService(
            session=session,
            issuer=TokenIssuer(JwtConfig.from_settings(settings)),
            bcrypt_rounds=settings.bcrypt_rounds,
        ).create_user(
            name="owner",
            email=email,
            password="a",
            roles=[RoleAssignment(RoleKind.franchisee, franchise.id)],
        )
        return franchise.id, email


@pytest.mark.asyncio
async def test_anonymous_listing_degrades_to_public_fields(
    app: FastAPI, client: httpx.AsyncClient, settings: Settings
) -> None:
    franchise_id, _ = await _franchise_with_admin(app, settings)

    r = await client.get("/api/franchise")
    assert r.status_code == 200
    assert r.json() == [{"id": franchise_id, "name": "pizzaPocket"}]


@pytest.mark.asyncio
async def test_inactive_token_on_optional_route_is_anonymous(
    app: FastAPI, client: httpx.AsyncClient, settings: Settings
) -> None:
    await _franchise_with_admin(app, settings)
    admin = await admin_login(client, settings)
    await client.delete("/api/auth", headers=bearer(admin["token"]))

    r = await client.get("/api/franchise", headers=bearer(admin["token"]))
    assert r.status_code == 200
    assert "admins" not in r.json()[0]


@pytest.mark.asyncio
async def test_admin_listing_includes_franchise_admins(
    app: FastAPI, client: httpx.AsyncClient, settings: Settings
) -> None:
    franchise_id, email = await _franchise_with_admin(app, settings)
    diner = await register(client)

    r = await client.get("/api/franchise", headers=bearer(diner["token"]))
    assert "admins" not in r.json()[0]

    admin = await admin_login(client, settings)
    r = await client.get("/api/franchise", headers=bearer(admin["token"]))
    assert r.status_code == 200
    [franchise] = r.json()
    assert franchise["id"] == franchise_id
    assert [a["email"] for a in franchise["admins"]] == [email]
