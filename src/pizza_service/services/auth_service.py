"""
pizza_service.services.auth_service

Authentication flows (transaction + persistence owner).

Responsibilities:
- Register users (diner role) and log them in.
- Log in with email/password, issuing and activating a session token.
- Log out by deactivating the caller's token.
- Update email/password for self or, as admin, for anyone.
- Maintenance operations used by the admin CLI.

Policy notes:
- Unknown email and wrong password fail identically.
- Changing the password does not revoke sessions issued before the change.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pizza_service.auth.deps import require_self_or_admin
from pizza_service.auth.models import Caller, RoleAssignment, RoleKind
from pizza_service.auth.passwords import hash_password_async, verify_password_async
from pizza_service.auth.sessions import SessionRegistry
from pizza_service.auth.tokens import TokenIssuer
from pizza_service.db.models import User
from pizza_service.db.repositories.franchises import FranchiseRepo
from pizza_service.db.repositories.users import UserRepo
from pizza_service.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from pizza_service.observability.logging import get_logger
from pizza_service.observability.metrics import AuthMetrics

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AuthResult:
    user: User
    token: str


class AuthService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        issuer: TokenIssuer,
        metrics: AuthMetrics | None = None,
        bcrypt_rounds: int = 10,
    ) -> None:
        self._session = session
        self._issuer = issuer
        self._metrics = metrics or AuthMetrics()
        self._rounds = bcrypt_rounds

        self._users = UserRepo(session)
        self._franchises = FranchiseRepo(session)
        self._registry = SessionRegistry(session)

    async def _issue_and_activate(self, user: User) -> str:
        token = self._issuer.issue(
            user_id=user.id,
            name=user.name,
            email=user.email,
            roles=user.role_assignments(),
        )
        await self._registry.activate(user.id, token)
        return token

    async def create_user(
        self,
        *,
        name: str,
        email: str,
        password: str,
        roles: Sequence[RoleAssignment],
    ) -> User:
        if await self._users.get_by_email(email) is not None:
            raise ConflictError("email already registered")

        scoped = [r.object_id or 0 for r in roles if r.is_scoped]
        missing = await self._franchises.missing_ids(scoped)
        if missing:
            raise ValidationError("franchisee role must reference an existing franchise")

        password_hash = await hash_password_async(password, rounds=self._rounds)
        try:
            user = await self._users.create(
                name=name, email=email, password_hash=password_hash, roles=roles
            )
            await self._session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email.
            await self._session.rollback()
            raise ConflictError("email already registered") from e
        return user

    async def register(
        self, *, name: str | None, email: str | None, password: str | None
    ) -> AuthResult:
        # Validated before any persistence or token work.
        if not name or not email or not password:
            raise ValidationError("name, email, and password are required")
        # Fail before the user row exists; otherwise the account would outlive the error.
        self._issuer.ensure_configured()

        user = await self.create_user(
            name=name,
            email=email,
            password=password,
            roles=[RoleAssignment(role=RoleKind.diner)],
        )
        token = await self._issue_and_activate(user)
        self._metrics.record_registration(user.id)
        log.info("user_registered", user_id=user.id)
        return AuthResult(user=user, token=token)

    async def login(self, *, email: str | None, password: str | None) -> AuthResult:
        if not email or not password:
            raise ValidationError("email and password are required")

        user = await self._users.get_by_email(email)
        # Always one bcrypt check, even for unknown emails.
        ok = await verify_password_async(
            password, user.password if user is not None else None, rounds=self._rounds
        )
        if user is None or not ok:
            self._metrics.record_login_failure()
            log.info("login_failed")
            raise AuthenticationError()

        token = await self._issue_and_activate(user)
        self._metrics.record_login(user.id)
        log.info("login_succeeded", user_id=user.id)
        return AuthResult(user=user, token=token)

    async def logout(self, caller: Caller) -> None:
        await self._registry.deactivate(caller.token)
        self._metrics.record_logout(caller.id)
        log.info("logout", user_id=caller.id)

    async def update_user(
        self,
        caller: Caller,
        user_id: int,
        *,
        email: str | None = None,
        password: str | None = None,
    ) -> User:
        # Authorize before looking anything up, so 403 never leaks existence.
        require_self_or_admin(caller, user_id)

        user = await self._users.get(user_id)
        if user is None:
            raise NotFoundError("unknown user")

        if email and email != user.email:
            if await self._users.get_by_email(email) is not None:
                raise ConflictError("email already registered")
        password_hash = (
            await hash_password_async(password, rounds=self._rounds) if password else None
        )
        try:
            await self._users.update_credentials(
                user, email=email or None, password_hash=password_hash
            )
            await self._session.commit()
        except IntegrityError as e:
            # Another update or registration claimed the email after the check above.
            await self._session.rollback()
            raise ConflictError("email already registered") from e
        log.info(
            "user_updated",
            user_id=user.id,
            actor=caller.id,
            email_changed=bool(email),
            password_changed=password_hash is not None,
        )
        return user

    async def promote_admin(self, email: str) -> User:
        user = await self._users.get_by_email(email)
        if user is None:
            raise NotFoundError("unknown user")
        await self._users.replace_roles(user, [RoleAssignment(role=RoleKind.admin)])
        await self._session.commit()
        log.info("user_promoted", user_id=user.id)
        return user


# --- Module Notes -----------------------------------------------------------
# Sessions are additive: concurrent logins for one user each get their own
# signature and stay valid until individually logged out.
