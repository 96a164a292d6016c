"""
pizza_service.observability

Observability package.

Responsibilities:
- Structured logging configuration with secret redaction.
- Request context propagation and HTTP request logging.
- Process-scoped authentication counters.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Exporters (Grafana/OTLP) are sinks outside this service's core and can be added
# here without touching auth logic.
