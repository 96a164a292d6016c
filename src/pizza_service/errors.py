"""
pizza_service.errors

Service error taxonomy.

Responsibilities:
- Give every failure a stable HTTP status and a client-safe message.
- Keep authentication (401) and authorization (403) failures distinct.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)


class ServiceError(Exception):
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationError(ServiceError):
    """No usable caller: missing/inactive/undecodable token or bad credentials."""

    status_code = HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"


class AuthorizationError(ServiceError):
    """Caller is known but lacks the privilege for this operation."""

    status_code = HTTP_403_FORBIDDEN
    default_message = "unauthorized"


class ValidationError(ServiceError):
    status_code = HTTP_400_BAD_REQUEST
    default_message = "invalid request"


class NotFoundError(ServiceError):
    status_code = HTTP_404_NOT_FOUND
    default_message = "not found"


class ConflictError(ServiceError):
    status_code = HTTP_409_CONFLICT
    default_message = "conflict"


class ConfigurationError(ServiceError):
    # Misconfiguration (e.g. no signing secret) is fatal for the request and never retried.
    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "service misconfigured"


class InfrastructureError(ServiceError):
    status_code = HTTP_503_SERVICE_UNAVAILABLE
    default_message = "service unavailable"


# --- Module Notes -----------------------------------------------------------
# Rendering into `{"message": ...}` bodies happens in `api.errors`; services and
# repositories raise these without knowing about HTTP responses.
