"""Storage configuration for the document bucket.

Builds the configured object storage adapter from application settings.
Supports MinIO (development), AWS S3 (production) and an in-memory backend
with the same interface.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ...config import Settings
from ...domain.documents.ports.object_storage_port import ObjectStoragePort

logger = logging.getLogger(__name__)


@dataclass
class StorageConfig:
    """Configuration for S3-compatible object storage.

    Attributes:
        endpoint_url: S3 endpoint URL (e.g., 'http://localhost:9000' for MinIO,
                      None for AWS S3 which uses default regional endpoints)
        access_key: S3 access key ID (None to use the default credential chain)
        secret_key: S3 secret access key
        bucket_name: Bucket holding data room documents
        region: AWS region (default: 'us-east-1')
        public_base_url: Base URL for public links (None to derive one)
    """
    endpoint_url: Optional[str]
    access_key: Optional[str]
    secret_key: Optional[str]
    bucket_name: str
    region: str = "us-east-1"
    public_base_url: Optional[str] = None


def load_storage_config(settings: Settings) -> StorageConfig:
    """Extract and validate storage configuration from settings.

    Raises:
        ValueError: If the configuration is invalid
    """
    config = StorageConfig(
        endpoint_url=settings.S3_ENDPOINT_URL,
        access_key=settings.S3_ACCESS_KEY_ID,
        secret_key=(
            settings.S3_SECRET_ACCESS_KEY.get_secret_value()
            if settings.S3_SECRET_ACCESS_KEY else None
        ),
        bucket_name=settings.S3_BUCKET_NAME,
        region=settings.S3_REGION,
        public_base_url=settings.S3_PUBLIC_BASE_URL,
    )
    validate_storage_config(config)
    return config


def validate_storage_config(config: StorageConfig) -> None:
    """Validate storage configuration.

    Raises:
        ValueError: If configuration is invalid
    """
    if not config.bucket_name:
        raise ValueError("Storage bucket_name is required")

    if bool(config.access_key) != bool(config.secret_key):
        raise ValueError("S3 access key and secret key must be set together")

    for name, url in (("endpoint_url", config.endpoint_url), ("public_base_url", config.public_base_url)):
        if url and not url.startswith(("http://", "https://")):
            raise ValueError(f"Invalid {name}: {url}. Must start with http:// or https://")

    if not config.endpoint_url and not config.region:
        raise ValueError("AWS region is required when using S3 (S3_ENDPOINT_URL not set)")


def build_storage_adapter(settings: Settings) -> ObjectStoragePort:
    """Create the object storage adapter selected by STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "memory":
        from .memory_storage_adapter import InMemoryStorageAdapter

        logger.info(f"Using in-memory storage: bucket={settings.S3_BUCKET_NAME}")
        return InMemoryStorageAdapter(bucket_name=settings.S3_BUCKET_NAME)

    from .s3_storage_adapter import S3StorageAdapter

    config = load_storage_config(settings)
    return S3StorageAdapter(
        endpoint_url=config.endpoint_url,
        access_key=config.access_key,
        secret_key=config.secret_key,
        bucket_name=config.bucket_name,
        region=config.region,
        public_base_url=config.public_base_url,
    )
