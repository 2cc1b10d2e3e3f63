"""Observability: structured logging, request IDs, metrics and health checks."""

from .health import ComponentHealth, HealthStatus
from .logging_config import configure_logging, get_logger
from .middleware import RequestIDMiddleware
from .request_id import generate_request_id, get_request_id, request_id_var, set_request_id

__all__ = [
    "configure_logging",
    "get_logger",
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
    "HealthStatus",
    "ComponentHealth",
    "RequestIDMiddleware",
]
