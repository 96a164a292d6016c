"""
pizza_service.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) that touches the session table every
  authenticated request depends on.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pizza_service.api.deps import db_session
from pizza_service.db.models import AuthSession

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    # Fails (503 via the DB error handler) when the DB or the auth schema is missing.
    await session.execute(select(AuthSession.signature).limit(1))
    return {"status": "ready"}
