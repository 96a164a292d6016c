"""
pizza_service.db.repositories.users

Repository for `User` and `UserRole` entities.

Responsibilities:
- Create users with their role assignments.
- Look users up by id or email.
- Update credentials and replace role sets.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pizza_service.auth.models import UNSCOPED_OBJECT_ID, RoleAssignment, RoleKind
from pizza_service.db.models import User, UserRole


def _role_rows(roles: Sequence[RoleAssignment]) -> list[UserRole]:
    return [
        UserRole(role=r.role, object_id=r.object_id if r.is_scoped else UNSCOPED_OBJECT_ID)
        for r in roles
    ]


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        roles: Sequence[RoleAssignment],
    ) -> User:
        user = User(name=name, email=email, password=password_hash, roles=_role_rows(roles))
        self._session.add(user)
        await self._session.flush()
        return user

    async def get(self, user_id: int) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def count(self) -> int:
        return (await self._session.execute(select(func.count(User.id)))).scalar_one()

    async def update_credentials(
        self,
        user: User,
        *,
        email: str | None = None,
        password_hash: str | None = None,
    ) -> User:
        if email is not None:
            user.email = email
        if password_hash is not None:
            user.password = password_hash
        await self._session.flush()
        return user

    async def replace_roles(self, user: User, roles: Sequence[RoleAssignment]) -> User:
        # delete-orphan cascade removes the previous rows on flush.
        user.roles = _role_rows(roles)
        await self._session.flush()
        return user

    async def list_franchise_admins(self, franchise_ids: Sequence[int]) -> dict[int, list[User]]:
        if not franchise_ids:
            return {}
        stmt = (
            select(UserRole.object_id, User)
            .join(User, User.id == UserRole.user_id)
            .where(UserRole.role == RoleKind.franchisee, UserRole.object_id.in_(franchise_ids))
            .order_by(UserRole.id)
        )
        admins: dict[int, list[User]] = {fid: [] for fid in franchise_ids}
        for object_id, user in (await self._session.execute(stmt)).all():
            admins[object_id].append(user)
        return admins
