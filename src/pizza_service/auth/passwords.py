"""
pizza_service.auth.passwords

Password hashing primitives for the credential store.

Responsibilities:
- Hash passwords with bcrypt for storage.
- Verify candidates against stored hashes with constant effort, including
  for unknown accounts.
- Offload the CPU-bound work to a worker thread for async callers.
"""

from __future__ import annotations

import asyncio
from functools import lru_cache

import bcrypt

# bcrypt only looks at the first 72 bytes.
_BCRYPT_MAX_BYTES = 72


def _pw_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, *, rounds: int = 10) -> str:
    """Hash a plain-text password for storage."""
    return bcrypt.hashpw(_pw_bytes(plain_password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash; malformed hashes never match."""
    try:
        return bcrypt.checkpw(_pw_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=8)
def dummy_hash(rounds: int) -> str:
    # Compared against when the account does not exist so both paths cost one bcrypt check.
    return hash_password("not-a-real-password", rounds=rounds)


async def hash_password_async(plain_password: str, *, rounds: int = 10) -> str:
    return await asyncio.to_thread(hash_password, plain_password, rounds=rounds)


async def verify_password_async(
    plain_password: str, hashed: str | None, *, rounds: int = 10
) -> bool:
    return await asyncio.to_thread(_check, plain_password, hashed, rounds)


def _check(plain_password: str, hashed: str | None, rounds: int) -> bool:
    if hashed is None:
        verify_password(plain_password, dummy_hash(rounds))
        return False
    return verify_password(plain_password, hashed)


# --- Module Notes -----------------------------------------------------------
# Hashes are never kept on domain objects returned to routes; only the ORM row
# carries them.
