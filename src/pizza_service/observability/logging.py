"""
pizza_service.observability.logging

Structured logging configuration for the service.

Responsibilities:
- Configure `structlog` for JSON logs suitable for Loki/ELK/Datadog.
- Mask credentials (passwords, tokens, API keys, card numbers) before rendering.
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

import structlog
from structlog.tracebacks import ExceptionDictTransformer

MASK = "*****"

# Compared case-insensitively with underscores removed.
_SENSITIVE_KEYS = frozenset(
    {"password", "token", "apikey", "authorization", "creditcard", "cardnumber", "jwtsecret"}
)
_BEARER_RE = re.compile(r"Bearer\s+[^\s\"']+")
_JSON_SECRET_RE = re.compile(
    r"\"(password|token|apiKey|creditCard|cardNumber)\"\s*:\s*\"[^\"]*\"", re.IGNORECASE
)


def configure_logging(*, service_name: str, level: str) -> None:
    """
    Structured JSON logs for ingestion in Loki/ELK/Datadog.
    """

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=build_processors(service_name),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def build_processors(service_name: str) -> list[Any]:
    # structlog processors run on each log event; keep this list focused and stable.
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_name(service_name),
        # Frame locals hold plaintext credentials; tracebacks carry code locations only.
        structlog.processors.ExceptionRenderer(ExceptionDictTransformer(show_locals=False)),
        # Runs after exception rendering so traceback dicts are redacted too.
        redact_secrets,
        structlog.processors.JSONRenderer(),
    ]


def _add_service_name(service_name: str):
    # Adds a stable "service" field for log routing/aggregation across environments.
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def _is_sensitive(key: object) -> bool:
    return isinstance(key, str) and key.replace("_", "").lower() in _SENSITIVE_KEYS


def sanitize(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: MASK if _is_sensitive(k) else sanitize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [sanitize(v) for v in value]
    if isinstance(value, tuple):
        return tuple(sanitize(v) for v in value)
    if isinstance(value, str):
        value = _JSON_SECRET_RE.sub(lambda m: f'"{m.group(1)}": "{MASK}"', value)
        return _BEARER_RE.sub(f"Bearer {MASK}", value)
    return value


def redact_secrets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    return sanitize(event_dict)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Request-scoped metadata is bound via contextvars in `observability.middleware`.
