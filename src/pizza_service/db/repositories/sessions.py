"""
pizza_service.db.repositories.sessions

Repository for `AuthSession` rows (active token signatures).

Responsibilities:
- Point insert/lookup/delete keyed by signature.
- Bulk removal for maintenance (all sessions, or sessions older than a cutoff).
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pizza_service.db.models import AuthSession


class AuthSessionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, *, signature: str, user_id: int) -> None:
        # Re-inserting a known signature is a no-op.
        if await self._session.get(AuthSession, signature) is not None:
            return
        self._session.add(AuthSession(signature=signature, user_id=user_id))
        await self._session.flush()

    async def exists(self, signature: str) -> bool:
        stmt = select(AuthSession.signature).where(AuthSession.signature == signature)
        return (await self._session.execute(stmt)).first() is not None

    async def delete(self, signature: str) -> int:
        result = await self._session.execute(
            delete(AuthSession).where(AuthSession.signature == signature)
        )
        return result.rowcount or 0

    async def delete_all(self) -> int:
        result = await self._session.execute(delete(AuthSession))
        return result.rowcount or 0

    async def delete_older_than(self, cutoff: datetime) -> int:
        result = await self._session.execute(
            delete(AuthSession).where(AuthSession.created_at < cutoff)
        )
        return result.rowcount or 0

    async def count_for_user(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(AuthSession).where(AuthSession.user_id == user_id)
        return (await self._session.execute(stmt)).scalar_one()


# --- Module Notes -----------------------------------------------------------
# Each method is a single statement; callers commit immediately after mutations.
