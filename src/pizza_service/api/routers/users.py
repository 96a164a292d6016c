from __future__ import annotations

from fastapi import APIRouter, Depends

from pizza_service.api.schemas import UserView
from pizza_service.auth.deps import require_caller
from pizza_service.auth.models import Caller

router = APIRouter(prefix="/api/user", tags=["users"])


@router.get("/me", response_model=UserView, response_model_exclude_none=True)
async def get_me(caller: Caller = Depends(require_caller)) -> UserView:
    # Identity as embedded in the token at issuance time.
    return UserView.from_caller(caller)
