"""
tests.conftest

Shared fixtures: test settings, a booted app over a throwaway SQLite file, and an
httpx client bound to it through ASGITransport.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pizza_service.api.app import create_app
from pizza_service.auth.tokens import JwtConfig, TokenIssuer
from pizza_service.db.init_db import init_db
from pizza_service.db.session import create_engine, create_sessionmaker
from pizza_service.settings import Settings

TEST_SECRET = "test-secret-that-is-long-enough-for-hs256"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'pizza-test.db'}",
        jwt_secret=TEST_SECRET,
        # Lowest bcrypt cost keeps the suite fast.
        bcrypt_rounds=4,
    )


@pytest.fixture
def issuer(settings: Settings) -> TokenIssuer:
    return TokenIssuer(JwtConfig.from_settings(settings))


@pytest_asyncio.fixture
async def session_factory(settings: Settings) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    # Bare persistence without the HTTP app, for registry/service tests.
    engine = create_engine(settings)
    await init_db(engine)
    try:
        yield create_sessionmaker(engine)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not manage lifespan automatically; do it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def random_email(domain: str = "test.com") -> str:
    return f"{uuid.uuid4().hex[:10]}@{domain}"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register(
    client: httpx.AsyncClient,
    *,
    name: str = "pizza diner",
    email: str | None = None,
    password: str = "a",
) -> dict:
    r = await client.post(
        "/api/auth", json={"name": name, "email": email or random_email(), "password": password}
    )
    assert r.status_code == 200, r.text
    return r.json()


async def admin_login(client: httpx.AsyncClient, settings: Settings) -> dict:
    r = await client.put(
        "/api/auth",
        json={
            "email": settings.bootstrap_admin_email,
            "password": settings.bootstrap_admin_password,
        },
    )
    assert r.status_code == 200, r.text
    return r.json()
