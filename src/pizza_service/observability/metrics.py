"""
pizza_service.observability.metrics

Process-scoped authentication counters.

Responsibilities:
- Count registrations, logins, failed logins and logouts.
- Track which users currently hold at least one session issued by this process.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request


@dataclass
class AuthMetrics:
    registrations: int = 0
    logins: int = 0
    failed_logins: int = 0
    logouts: int = 0
    _sessions_by_user: Counter[int] = field(default_factory=Counter, repr=False)

    def record_registration(self, user_id: int) -> None:
        self.registrations += 1
        self._sessions_by_user[user_id] += 1

    def record_login(self, user_id: int) -> None:
        self.logins += 1
        self._sessions_by_user[user_id] += 1

    def record_login_failure(self) -> None:
        self.failed_logins += 1

    def record_logout(self, user_id: int) -> None:
        self.logouts += 1
        if self._sessions_by_user[user_id] > 1:
            self._sessions_by_user[user_id] -= 1
        else:
            del self._sessions_by_user[user_id]

    @property
    def active_users(self) -> int:
        return len(self._sessions_by_user)

    def snapshot(self) -> dict[str, Any]:
        return {
            "registrations": self.registrations,
            "logins": self.logins,
            "failedLogins": self.failed_logins,
            "logouts": self.logouts,
            "activeUsers": self.active_users,
        }


def auth_metrics(request: Request) -> AuthMetrics:
    # Created once per app in `api.app.create_app`.
    return request.app.state.auth_metrics  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Counters are per process and reset on restart; the session table is the
# durable source of truth for who is logged in.
