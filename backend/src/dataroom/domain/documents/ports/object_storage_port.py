"""Object Storage Port - Domain interface for the document bucket.

This port defines the contract the document repository consumes. Adapters
bind it to one fixed bucket (S3-compatible service, or in-memory for
development and tests).

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass
class StoredObject:
    """Metadata for an object in the bucket.

    Attributes:
        name: Object key (format: {epoch_millis}_{sanitized_name})
        created_at: Creation timestamp if the backend tracks one
        updated_at: Last-modified timestamp if the backend tracks one
        size_bytes: Object size in bytes if known
    """
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    size_bytes: Optional[int] = None


class StorageError(Exception):
    """Raised by adapters on transport or permission failures.

    ``reason`` is the store's own message, suitable for showing to users.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ObjectStoragePort(ABC):
    """Port interface for the bucket holding data room documents.

    Key Design Principles:
    - One adapter instance is bound to one bucket
    - Uploads overwrite by default (last write wins, no conflict check)
    - Public URLs are derived syntactically, without a network call

    Example Usage:
        storage = S3StorageAdapter(...)

        await storage.upload("1716400000000_deck.pdf", data, "application/pdf")
        objects = await storage.list_objects(limit=100)
        url = storage.public_url(objects[0].name)
    """

    @abstractmethod
    async def list_objects(self, prefix: str = "", limit: int = 100) -> List[StoredObject]:
        """List up to ``limit`` objects directly under ``prefix``.

        Keys nested deeper (another ``/`` after the prefix) are not listed.

        Ordering is whatever the backend returns.

        Raises:
            StorageError: If the listing fails
        """

    @abstractmethod
    async def upload(
        self,
        key: str,
        data: bytes,
        content_type: Optional[str] = None,
        overwrite: bool = True,
    ) -> StoredObject:
        """Store ``data`` under ``key``.

        Args:
            key: Object key
            data: File content
            content_type: MIME type, if known
            overwrite: Replace an existing object with the same key

        Returns:
            StoredObject: Metadata of the stored object

        Raises:
            StorageError: If the upload fails, or the key exists and
                overwrite is False
        """

    @abstractmethod
    async def remove(self, keys: List[str]) -> None:
        """Remove objects by key. Missing keys are not an error.

        Raises:
            StorageError: If the backend rejects the removal
        """

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Derive the public URL for ``key``. Never performs I/O, never fails."""

    @abstractmethod
    async def verify_bucket_exists(self) -> bool:
        """Check that the configured bucket exists.

        Returns:
            bool: False if the store answers but the bucket is missing

        Raises:
            StorageError: If the store is unreachable or refuses the check
        """
