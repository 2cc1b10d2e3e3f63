"""Document repository - catalog owner for one data room session.

Orchestrates list/upload/delete against the object store. The catalog is
rebuilt wholesale from the store after every mutation instead of being
patched locally, so it always reflects the bucket (including changes made
by other parties) as of the last successful listing.
"""

import asyncio
import logging
from typing import Callable, Optional

from ..errors import DeleteRejected, StoreUnavailable, UploadRejected
from .document import Catalog, Document
from .ports.object_storage_port import ObjectStoragePort, StorageError
from .sanitizer import build_storage_key, current_epoch_millis

logger = logging.getLogger(__name__)

CATALOG_PAGE_SIZE = 100


class DocumentRepository:
    """Catalog of documents backed by an object storage bucket.

    Mutations and refreshes are serialized by a single lock. A failed refresh
    never clears the catalog: callers keep seeing the last good snapshot.

    Example:
        repository = DocumentRepository(storage)
        await repository.list_documents()
        document = await repository.upload(data, "Q3 Financials (v2).xlsx")
        await repository.delete(document.storage_key)
    """

    def __init__(
        self,
        storage: ObjectStoragePort,
        page_size: int = CATALOG_PAGE_SIZE,
        clock: Callable[[], int] = current_epoch_millis,
        max_upload_size: Optional[int] = None,
    ):
        self._storage = storage
        self._page_size = min(page_size, CATALOG_PAGE_SIZE)
        self._clock = clock
        self._max_upload_size = max_upload_size
        self._catalog: Catalog = ()
        self._lock = asyncio.Lock()

    @property
    def catalog(self) -> Catalog:
        """Snapshot as of the last successful listing."""
        return self._catalog

    async def list_documents(self) -> Catalog:
        """Fetch the catalog from the store, replacing the current one.

        Raises:
            StoreUnavailable: If the listing fails (catalog left unchanged)
        """
        async with self._lock:
            return await self._refresh()

    async def upload(
        self,
        data: bytes,
        raw_name: str,
        content_type: Optional[str] = None,
    ) -> Document:
        """Upload a file under a fresh timestamped key and refresh the catalog.

        Two uploads landing on the same millisecond with the same sanitized
        name share a key; the later one wins.

        Args:
            data: File content
            raw_name: Filename as supplied by the uploader
            content_type: MIME type, if known

        Returns:
            Document: The uploaded document

        Raises:
            UploadRejected: If the size limit or the store rejects the upload
            StoreUnavailable: If the upload succeeded but the refresh failed
        """
        if self._max_upload_size is not None and len(data) > self._max_upload_size:
            raise UploadRejected(
                f"File exceeds maximum size of {self._max_upload_size} bytes "
                f"(got {len(data)} bytes)"
            )

        storage_key = build_storage_key(raw_name, self._clock())

        async with self._lock:
            try:
                stored = await self._storage.upload(
                    storage_key, data, content_type=content_type, overwrite=True
                )
            except StorageError as e:
                logger.error(
                    f"Upload rejected: storage_key={storage_key}, reason={e.reason}",
                    extra={"storage_key": storage_key},
                )
                raise UploadRejected(e.reason) from e

            logger.info(
                f"Uploaded document: storage_key={storage_key}, size={len(data)}",
                extra={"storage_key": storage_key},
            )
            catalog = await self._refresh()

        for document in catalog:
            if document.storage_key == storage_key:
                return document
        return Document.from_stored_object(stored)

    async def delete(self, storage_key: str) -> None:
        """Remove a document from the store and refresh the catalog.

        Confirmation is the caller's responsibility.

        Raises:
            DeleteRejected: If the store rejects the removal
            StoreUnavailable: If the removal succeeded but the refresh failed
        """
        async with self._lock:
            try:
                await self._storage.remove([storage_key])
            except StorageError as e:
                logger.error(
                    f"Delete rejected: storage_key={storage_key}, reason={e.reason}",
                    extra={"storage_key": storage_key},
                )
                raise DeleteRejected(e.reason) from e

            logger.info(f"Deleted document: storage_key={storage_key}", extra={"storage_key": storage_key})
            await self._refresh()

    def public_url_for(self, storage_key: str) -> str:
        return self._storage.public_url(storage_key)

    def clear(self) -> None:
        """Drop the in-memory catalog (gate exit)."""
        self._catalog = ()

    async def _refresh(self) -> Catalog:
        try:
            objects = await self._storage.list_objects(prefix="", limit=self._page_size)
        except StorageError as e:
            logger.warning(f"Catalog refresh failed, keeping previous snapshot: {e.reason}")
            raise StoreUnavailable(f"Could not load documents: {e.reason}") from e

        self._catalog = tuple(Document.from_stored_object(obj) for obj in objects)
        logger.debug(f"Catalog refreshed: count={len(self._catalog)}")
        return self._catalog
