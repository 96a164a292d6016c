from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pizza_service.db.models import Franchise


class FranchiseRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, name: str) -> Franchise:
        franchise = Franchise(name=name)
        self._session.add(franchise)
        await self._session.flush()
        return franchise

    async def get(self, franchise_id: int) -> Franchise | None:
        return await self._session.get(Franchise, franchise_id)

    async def missing_ids(self, franchise_ids: Iterable[int]) -> set[int]:
        wanted = set(franchise_ids)
        if not wanted:
            return set()
        stmt = select(Franchise.id).where(Franchise.id.in_(wanted))
        found = set((await self._session.execute(stmt)).scalars().all())
        return wanted - found

    async def list_all(self) -> list[Franchise]:
        stmt = select(Franchise).order_by(Franchise.id)
        return list((await self._session.execute(stmt)).scalars().all())
