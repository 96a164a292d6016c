"""
pizza_service.auth.models

Auth domain models.

Responsibilities:
- Define the closed role enumeration and role assignments.
- Define the authenticated identity type (`Caller`) passed to routes.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field


class RoleKind(enum.StrEnum):
    # Values are part of the token wire format and the user_roles table.
    diner = "diner"
    franchisee = "franchisee"
    admin = "admin"


# Unscoped roles are stored against this object id.
UNSCOPED_OBJECT_ID = 0


@dataclass(frozen=True, slots=True)
class RoleAssignment:
    role: RoleKind
    object_id: int | None = None

    @property
    def is_scoped(self) -> bool:
        return self.role is RoleKind.franchisee

    def to_claim(self) -> dict[str, object]:
        claim: dict[str, object] = {"role": self.role.value}
        if self.object_id:
            claim["objectId"] = self.object_id
        return claim

    @classmethod
    def from_claim(cls, raw: object) -> RoleAssignment:
        # Raises ValueError/TypeError on unknown roles or malformed entries.
        if not isinstance(raw, dict):
            raise TypeError("role claim must be an object")
        object_id = raw.get("objectId")
        if object_id is not None and not isinstance(object_id, int):
            raise TypeError("objectId must be an integer")
        return cls(role=RoleKind(raw.get("role")), object_id=object_id or None)


@dataclass(frozen=True, slots=True)
class Caller:
    """
    Authenticated caller identity, resolved once per request by the guard.
    """

    id: int
    name: str
    email: str
    roles: tuple[RoleAssignment, ...]
    token: str = field(repr=False, compare=False)

    def has_role(self, kind: RoleKind) -> bool:
        # Membership by kind only; scope checks belong to the route.
        return any(r.role is kind for r in self.roles)

    @property
    def is_admin(self) -> bool:
        return self.has_role(RoleKind.admin)

    def is_self(self, user_id: int) -> bool:
        return self.id == user_id

    def administers(self, admin_ids: Iterable[int]) -> bool:
        return self.is_admin or self.id in set(admin_ids)


# --- Module Notes -----------------------------------------------------------
# `Caller` is immutable and passed explicitly; nothing is attached to the request.
