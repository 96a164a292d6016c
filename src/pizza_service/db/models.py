"""
pizza_service.db.models

Persistence schema for the authentication core.

Responsibilities:
- User: identity record with a bcrypt password hash.
- UserRole: ordered role assignments (role kind + scope object id).
- Franchise: scope target for franchisee roles.
- AuthSession: active token signatures (the revocation table).
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pizza_service.auth.models import UNSCOPED_OBJECT_ID, RoleAssignment, RoleKind
from pizza_service.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC timestamps, matching what SQLite round-trips.
    return datetime.now(UTC).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True, index=True)
    # bcrypt hash; never serialized.
    password: Mapped[str] = mapped_column(String(128), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    roles: Mapped[list[UserRole]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserRole.id",
        lazy="selectin",
    )

    def role_assignments(self) -> tuple[RoleAssignment, ...]:
        return tuple(r.assignment() for r in self.roles)


class UserRole(Base):
    __tablename__ = "user_roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    role: Mapped[RoleKind] = mapped_column(Enum(RoleKind), nullable=False)
    object_id: Mapped[int] = mapped_column(Integer, nullable=False, default=UNSCOPED_OBJECT_ID)

    user: Mapped[User] = relationship(back_populates="roles")

    __table_args__ = (Index("ix_user_roles_role_object", "role", "object_id"),)

    def assignment(self) -> RoleAssignment:
        return RoleAssignment(role=self.role, object_id=self.object_id or None)


class Franchise(Base):
    __tablename__ = "franchises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)


class AuthSession(Base):
    __tablename__ = "auth_sessions"

    # Signature segment of an issued token; presence == token usable.
    signature: Mapped[str] = mapped_column(String(512), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)


# --- Module Notes -----------------------------------------------------------
# Users are never hard-deleted here; the auth_sessions FK relies on that.
