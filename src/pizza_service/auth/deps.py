"""
pizza_service.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Turn an inbound bearer token into a `Caller` (or no caller).
- Provide optional-caller and mandatory-caller dependencies; which one a route
  uses is decided at route registration.
- Provide the RBAC primitives routes compose into their own policy.
"""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pizza_service.api.deps import db_session, settings_dep
from pizza_service.auth.models import Caller, RoleKind
from pizza_service.auth.sessions import SessionRegistry
from pizza_service.auth.tokens import JwtConfig, TokenIssuer
from pizza_service.errors import AuthenticationError, AuthorizationError
from pizza_service.observability.logging import get_logger
from pizza_service.settings import Settings

log = get_logger(__name__)

# auto_error=False: a missing or malformed Authorization header means "no token".
_bearer = HTTPBearer(auto_error=False)


def token_issuer(settings: Settings = Depends(settings_dep)) -> TokenIssuer:
    return TokenIssuer(JwtConfig.from_settings(settings))


def session_registry(session: AsyncSession = Depends(db_session)) -> SessionRegistry:
    return SessionRegistry(session)


async def resolve_caller(
    *,
    token: str | None,
    registry: SessionRegistry,
    issuer: TokenIssuer,
) -> Caller | None:
    """
    UNVERIFIED -> VERIFIED (returns a Caller) or REJECTED (returns None).

    Storage and configuration failures propagate; they are not "no caller".
    """

    if not token:
        return None
    if not await registry.is_active(token):
        log.info("session_rejected", reason="inactive")
        return None
    try:
        claims = issuer.decode(token)
    except AuthenticationError:
        log.info("session_rejected", reason="undecodable")
        return None
    return Caller(
        id=claims.user_id,
        name=claims.name,
        email=claims.email,
        roles=claims.roles,
        token=token,
    )


async def get_optional_caller(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    registry: SessionRegistry = Depends(session_registry),
    issuer: TokenIssuer = Depends(token_issuer),
) -> Caller | None:
    token = creds.credentials if creds is not None else None
    return await resolve_caller(token=token, registry=registry, issuer=issuer)


async def require_caller(caller: Caller | None = Depends(get_optional_caller)) -> Caller:
    # Runs before the route body, so no business logic sees an unauthenticated request.
    if caller is None:
        raise AuthenticationError()
    return caller


def require_roles(*required: RoleKind):
    required_set = frozenset(required)

    def _dep(caller: Caller = Depends(require_caller)) -> Caller:
        if not all(caller.has_role(kind) for kind in required_set):
            raise AuthorizationError()
        return caller

    return _dep


def require_self_or_admin(caller: Caller, user_id: int) -> None:
    if not (caller.is_self(user_id) or caller.is_admin):
        raise AuthorizationError()


# --- Module Notes -----------------------------------------------------------
# Franchise-scoped checks use `Caller.administers(admin_ids)` with the admin ids
# loaded by the route.
