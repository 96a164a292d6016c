"""
pizza_service.auth.tokens

Session token issuing and decoding.

Responsibilities:
- Mint compact HS256 JWTs embedding the user's identity and role assignments.
- Decode and validate presented tokens back into typed claims.
- Extract the signature segment used as the revocation key.

Note:
- Issuing is pure; registering a token as active is the session registry's job.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from pizza_service.auth.models import RoleAssignment
from pizza_service.errors import AuthenticationError, ConfigurationError
from pizza_service.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    secret: str
    # None means no `exp` claim; the token then lives until logout.
    ttl: timedelta | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        ttl = timedelta(minutes=settings.jwt_ttl_minutes) if settings.jwt_ttl_minutes else None
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            secret=settings.jwt_secret,
            ttl=ttl,
        )


@dataclass(frozen=True, slots=True)
class TokenClaims:
    user_id: int
    name: str
    email: str
    roles: tuple[RoleAssignment, ...]


def token_signature(token: str) -> str:
    """Third dot-delimited segment, or "" when the token has fewer than three."""
    parts = token.split(".")
    if len(parts) > 2:
        return parts[2]
    return ""


class TokenIssuer:
    def __init__(self, cfg: JwtConfig) -> None:
        self._cfg = cfg

    def ensure_configured(self) -> None:
        if not self._cfg.secret:
            raise ConfigurationError("token signing secret is not configured")

    def _secret(self) -> str:
        self.ensure_configured()
        return self._cfg.secret

    def issue(
        self,
        *,
        user_id: int,
        name: str,
        email: str,
        roles: Sequence[RoleAssignment],
    ) -> str:
        secret = self._secret()
        now = datetime.now(tz=UTC)
        payload: dict[str, Any] = {
            "iss": self._cfg.issuer,
            "sub": str(user_id),
            "id": user_id,
            "name": name,
            "email": email,
            "roles": [r.to_claim() for r in roles],
            "iat": int(now.timestamp()),
            # Makes every issuance (and so every signature) unique, even within one second.
            "jti": uuid.uuid4().hex,
        }
        if self._cfg.ttl is not None:
            payload["exp"] = int((now + self._cfg.ttl).timestamp())
        return jwt.encode(payload, secret, algorithm=self._cfg.alg)

    def decode(self, token: str) -> TokenClaims:
        secret = self._secret()
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self._cfg.alg],
                issuer=self._cfg.issuer,
                options={"require": ["iat", "iss", "sub"]},
            )
        except InvalidTokenError as e:
            raise AuthenticationError() from e

        user_id = payload.get("id")
        roles_raw = payload.get("roles", [])
        if not isinstance(user_id, int) or not isinstance(roles_raw, list):
            raise AuthenticationError()
        try:
            roles = tuple(RoleAssignment.from_claim(r) for r in roles_raw)
        except (TypeError, ValueError) as e:
            raise AuthenticationError() from e

        return TokenClaims(
            user_id=user_id,
            name=str(payload.get("name", "")),
            email=str(payload.get("email", "")),
            roles=roles,
        )


# --- Module Notes -----------------------------------------------------------
# Expiry is optional (see Settings.jwt_ttl_minutes); the session registry stays the
# authority on whether a decodable token may be used.
