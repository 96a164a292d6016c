"""
pizza_service.auth.sessions

Signature-based session registry.

Responsibilities:
- Record a token's signature as active on login/registration.
- Answer "is this token currently usable?" for every authenticated request.
- Invalidate signatures on logout (and in bulk for maintenance).

Ordering:
- Every mutation commits before returning, so `activate` followed by
  `is_active` from the same process always observes True.
- A logout racing another request that carries the same token is benign: the
  other request sees the signature either before or after the delete.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pizza_service.auth.tokens import token_signature
from pizza_service.db.repositories.sessions import AuthSessionRepo
from pizza_service.observability.logging import get_logger

log = get_logger(__name__)


class SessionRegistry:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repo = AuthSessionRepo(session)

    async def activate(self, user_id: int, token: str) -> None:
        signature = token_signature(token)
        if not signature:
            raise ValueError("token has no signature segment")
        try:
            await self._repo.insert(signature=signature, user_id=user_id)
            await self._session.commit()
        except IntegrityError:
            # A concurrent insert of the same signature won; the row exists either way.
            await self._session.rollback()

    async def is_active(self, token: str) -> bool:
        signature = token_signature(token)
        if not signature:
            return False
        return await self._repo.exists(signature)

    async def deactivate(self, token: str) -> None:
        signature = token_signature(token)
        if not signature:
            return
        removed = await self._repo.delete(signature)
        await self._session.commit()
        if not removed:
            log.debug("session_already_inactive")

    async def deactivate_all(self) -> int:
        removed = await self._repo.delete_all()
        await self._session.commit()
        return removed

    async def purge_older_than(self, cutoff: datetime) -> int:
        removed = await self._repo.delete_older_than(cutoff)
        await self._session.commit()
        return removed


# --- Module Notes -----------------------------------------------------------
# Only signatures are stored: they identify one issuance without keeping a
# replayable token at rest.
