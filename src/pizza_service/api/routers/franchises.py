"""
pizza_service.api.routers.franchises

Read-only franchise listing.

Responsibilities:
- Serve the franchise list to anyone, with or without a caller.
- Include franchise admins only for callers with the admin role.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from pizza_service.api.deps import db_session
from pizza_service.auth.deps import get_optional_caller
from pizza_service.auth.models import Caller
from pizza_service.db.repositories.franchises import FranchiseRepo
from pizza_service.db.repositories.users import UserRepo

router = APIRouter(prefix="/api/franchise", tags=["franchises"])


class FranchiseAdminView(BaseModel):
    id: int
    name: str
    email: str


class FranchiseView(BaseModel):
    id: int
    name: str
    admins: list[FranchiseAdminView] | None = None


@router.get("", response_model=list[FranchiseView], response_model_exclude_none=True)
async def list_franchises(
    caller: Caller | None = Depends(get_optional_caller),
    session: AsyncSession = Depends(db_session),
) -> list[FranchiseView]:
    franchises = await FranchiseRepo(session).list_all()
    # No caller is fine here; the listing just degrades to public fields.
    if caller is None or not caller.is_admin:
        return [FranchiseView(id=f.id, name=f.name) for f in franchises]

    admins = await UserRepo(session).list_franchise_admins([f.id for f in franchises])
    return [
        FranchiseView(
            id=f.id,
            name=f.name,
            admins=[
                FranchiseAdminView(id=u.id, name=u.name, email=u.email) for u in admins[f.id]
            ],
        )
        for f in franchises
    ]
