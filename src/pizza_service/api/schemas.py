"""
pizza_service.api.schemas

Request/response models shared by the auth and user routers.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from pizza_service.auth.models import Caller, RoleAssignment
from pizza_service.db.models import User


class RegisterRequest(BaseModel):
    # Presence is checked by the service so the error message stays uniform.
    name: str | None = Field(default=None, max_length=256)
    email: str | None = Field(default=None, max_length=256)
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UpdateUserRequest(BaseModel):
    email: str | None = Field(default=None, max_length=256)
    password: str | None = None


class RoleView(BaseModel):
    role: str
    objectId: int | None = None

    @classmethod
    def of(cls, assignment: RoleAssignment) -> RoleView:
        return cls(role=assignment.role.value, objectId=assignment.object_id)


class UserView(BaseModel):
    """Public user view; never carries the password."""

    id: int
    name: str
    email: str
    roles: list[RoleView]

    @classmethod
    def from_user(cls, user: User) -> UserView:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            roles=[RoleView.of(r) for r in user.role_assignments()],
        )

    @classmethod
    def from_caller(cls, caller: Caller) -> UserView:
        return cls(
            id=caller.id,
            name=caller.name,
            email=caller.email,
            roles=[RoleView.of(r) for r in caller.roles],
        )


class AuthResponse(BaseModel):
    user: UserView
    token: str


class MessageResponse(BaseModel):
    message: str
