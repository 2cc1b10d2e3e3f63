"""Health checks for the inquiry database and the object store."""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain.documents.ports.object_storage_port import ObjectStoragePort, StorageError
from .logging_config import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class ComponentHealth:
    """Health status for a single component."""
    status: HealthStatus
    message: Optional[str] = None
    latency_ms: Optional[float] = None


def check_database_health(db: Session) -> ComponentHealth:
    try:
        start = time.perf_counter()
        db.execute(text("SELECT 1"))
        latency_ms = (time.perf_counter() - start) * 1000
        return ComponentHealth(
            status=HealthStatus.HEALTHY,
            message="Database connection OK",
            latency_ms=round(latency_ms, 2),
        )
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        return ComponentHealth(status=HealthStatus.UNHEALTHY, message="Database unavailable")


async def check_object_storage_health(storage: ObjectStoragePort) -> ComponentHealth:
    """Check that the document bucket is reachable.

    A reachable store without the bucket counts as degraded: the gate still
    works but every catalog listing will fail.
    """
    try:
        start = time.perf_counter()
        exists = await storage.verify_bucket_exists()
        latency_ms = (time.perf_counter() - start) * 1000
    except StorageError as e:
        logger.error(f"Object storage health check failed: {e.reason}")
        return ComponentHealth(status=HealthStatus.UNHEALTHY, message="Object storage unavailable")

    if not exists:
        return ComponentHealth(
            status=HealthStatus.DEGRADED,
            message="Document bucket not found",
            latency_ms=round(latency_ms, 2),
        )
    return ComponentHealth(
        status=HealthStatus.HEALTHY,
        message="Object storage connection OK",
        latency_ms=round(latency_ms, 2),
    )


def get_overall_health(components: Dict[str, ComponentHealth]) -> HealthStatus:
    if all(c.status == HealthStatus.HEALTHY for c in components.values()):
        return HealthStatus.HEALTHY

    if any(c.status == HealthStatus.UNHEALTHY for c in components.values()):
        return HealthStatus.UNHEALTHY

    return HealthStatus.DEGRADED
