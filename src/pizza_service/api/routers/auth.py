"""
pizza_service.api.routers.auth

Authentication endpoints under `/api/auth`.

Responsibilities:
- Register (+ auto-login), login, logout, and credential updates.
- Declare which routes need a caller; the guard itself never decides that.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pizza_service.api.deps import db_session, settings_dep
from pizza_service.api.schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UpdateUserRequest,
    UserView,
)
from pizza_service.auth.deps import require_caller, token_issuer
from pizza_service.auth.models import Caller
from pizza_service.auth.tokens import TokenIssuer
from pizza_service.observability.metrics import AuthMetrics, auth_metrics
from pizza_service.services.auth_service import AuthService
from pizza_service.settings import Settings

router = APIRouter(prefix="/api/auth", tags=["auth"])


def auth_service(
    session: AsyncSession = Depends(db_session),
    issuer: TokenIssuer = Depends(token_issuer),
    metrics: AuthMetrics = Depends(auth_metrics),
    settings: Settings = Depends(settings_dep),
) -> AuthService:
    return AuthService(
        session=session,
        issuer=issuer,
        metrics=metrics,
        bcrypt_rounds=settings.bcrypt_rounds,
    )


@router.post("", response_model=AuthResponse, response_model_exclude_none=True)
async def register(
    body: RegisterRequest,
    svc: AuthService = Depends(auth_service),
) -> AuthResponse:
    result = await svc.register(name=body.name, email=body.email, password=body.password)
    return AuthResponse(user=UserView.from_user(result.user), token=result.token)


@router.put("", response_model=AuthResponse, response_model_exclude_none=True)
async def login(
    body: LoginRequest,
    svc: AuthService = Depends(auth_service),
) -> AuthResponse:
    result = await svc.login(email=body.email, password=body.password)
    return AuthResponse(user=UserView.from_user(result.user), token=result.token)


@router.delete("", response_model=MessageResponse)
async def logout(
    caller: Caller = Depends(require_caller),
    svc: AuthService = Depends(auth_service),
) -> MessageResponse:
    await svc.logout(caller)
    return MessageResponse(message="logout successful")


@router.put("/{user_id}", response_model=UserView, response_model_exclude_none=True)
async def update_user(
    user_id: int,
    body: UpdateUserRequest,
    caller: Caller = Depends(require_caller),
    svc: AuthService = Depends(auth_service),
) -> UserView:
    user = await svc.update_user(caller, user_id, email=body.email, password=body.password)
    return UserView.from_user(user)


# --- Module Notes -----------------------------------------------------------
# Password changes leave existing sessions active; clients that want a clean slate
# log out explicitly.
