"""
pizza_service.admin.cli

Maintenance commands for operators.

Usage:
  python -m pizza_service.admin clean-sessions [--older-than-minutes N]
  python -m pizza_service.admin promote-admin a@jwt.com

Responsibilities:
- Revoke every active session (or only stale ones) by clearing signatures.
- Replace a user's roles with the admin role.
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from pizza_service.auth.sessions import SessionRegistry
from pizza_service.auth.tokens import JwtConfig, TokenIssuer
from pizza_service.db.session import create_engine, create_sessionmaker
from pizza_service.errors import ServiceError
from pizza_service.observability.logging import configure_logging, get_logger
from pizza_service.services.auth_service import AuthService
from pizza_service.settings import Settings, get_settings

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="python -m pizza_service.admin")
    sub = ap.add_subparsers(dest="command", required=True)

    clean = sub.add_parser("clean-sessions", help="log every user out")
    clean.add_argument(
        "--older-than-minutes",
        type=int,
        default=None,
        help="only remove sessions created more than N minutes ago",
    )

    promote = sub.add_parser("promote-admin", help="make a user an admin")
    promote.add_argument("email")
    return ap


async def clean_sessions(settings: Settings, older_than_minutes: int | None) -> int:
    engine = create_engine(settings)
    try:
        async with create_sessionmaker(engine)() as session:
            registry = SessionRegistry(session)
            if older_than_minutes is None:
                return await registry.deactivate_all()
            cutoff = datetime.now(UTC).replace(tzinfo=None) - timedelta(
                minutes=older_than_minutes
            )
            return await registry.purge_older_than(cutoff)
    finally:
        await engine.dispose()


async def promote_admin(settings: Settings, email: str) -> int:
    engine = create_engine(settings)
    try:
        async with create_sessionmaker(engine)() as session:
            svc = AuthService(
                session=session,
                issuer=TokenIssuer(JwtConfig.from_settings(settings)),
                bcrypt_rounds=settings.bcrypt_rounds,
            )
            user = await svc.promote_admin(email)
            return user.id
    finally:
        await engine.dispose()


def main(argv: Sequence[str] | None = None, *, settings: Settings | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or get_settings()
    configure_logging(service_name=f"{settings.service_name}-admin", level=settings.log_level)

    try:
        if args.command == "clean-sessions":
            removed = asyncio.run(clean_sessions(settings, args.older_than_minutes))
            log.info("sessions_cleaned", removed=removed)
            print(f"Removed {removed} session(s). Affected users must log in again.")
        else:
            user_id = asyncio.run(promote_admin(settings, args.email))
            print(f"User {user_id} ({args.email}) is now an admin.")
            print("Tokens issued before this keep their old roles until the user logs in again.")
    except ServiceError as e:
        log.error("admin_command_failed", command=args.command, error=e.message)
        print(f"error: {e.message}")
        return 1
    return 0
