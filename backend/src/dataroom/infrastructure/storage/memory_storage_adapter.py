"""In-memory storage adapter for development and tests.

Keeps objects in a dict, lists them in key order like S3, and reports
creation/update timestamps the way a hosted bucket does.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ...domain.documents.ports.object_storage_port import (
    ObjectStoragePort,
    StorageError,
    StoredObject,
)

logger = logging.getLogger(__name__)


@dataclass
class _MemoryObject:
    data: bytes
    content_type: Optional[str]
    created_at: datetime
    updated_at: datetime


class InMemoryStorageAdapter(ObjectStoragePort):
    """Object storage held in process memory. Not shared between processes."""

    def __init__(self, bucket_name: str = "dataroom-documents"):
        self.bucket_name = bucket_name
        self._objects: Dict[str, _MemoryObject] = {}

    async def list_objects(self, prefix: str = "", limit: int = 100) -> List[StoredObject]:
        # Same shape as an S3 listing with Delimiter="/": nested keys are skipped
        keys = sorted(
            key for key in self._objects
            if key.startswith(prefix) and "/" not in key[len(prefix):]
        )
        return [self._stored(key) for key in keys[:limit]]

    async def upload(
        self,
        key: str,
        data: bytes,
        content_type: Optional[str] = None,
        overwrite: bool = True,
    ) -> StoredObject:
        now = datetime.now(timezone.utc)
        existing = self._objects.get(key)
        if existing is not None and not overwrite:
            raise StorageError(f"The resource already exists: {key}")

        self._objects[key] = _MemoryObject(
            data=bytes(data),
            content_type=content_type,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        logger.debug(f"Stored object in memory: storage_key={key}, size={len(data)}")
        return self._stored(key)

    async def remove(self, keys: List[str]) -> None:
        for key in keys:
            self._objects.pop(key, None)

    def public_url(self, key: str) -> str:
        return f"memory://{self.bucket_name}/{key}"

    async def verify_bucket_exists(self) -> bool:
        return True

    def read(self, key: str) -> bytes:
        """Return stored bytes (test helper).

        Raises:
            FileNotFoundError: If the key is not stored
        """
        try:
            return self._objects[key].data
        except KeyError:
            raise FileNotFoundError(f"File not found: {key}")

    def _stored(self, key: str) -> StoredObject:
        obj = self._objects[key]
        return StoredObject(
            name=key,
            created_at=obj.created_at,
            updated_at=obj.updated_at,
            size_bytes=len(obj.data),
        )
