"""Document API endpoints

Catalog listing, refresh, upload, delete and public URL derivation for the
caller's data room session. Every store call goes through the session's
DocumentRepository; failures surface as domain errors and are rendered by
the application's exception handlers.
"""

from typing import Annotated

from fastapi import APIRouter, File, Query, UploadFile, status

from ..domain.errors import DataRoomError, DeletionNotConfirmed, StoreUnavailable
from ..gate.dependencies import UnlockedSession
from ..observability import metrics
from .schemas import CatalogResponse, DocumentResponse, PublicUrlResponse, UploadResponse

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.get("", response_model=CatalogResponse)
async def get_catalog(session: UnlockedSession):
    """Return the catalog as of the last successful refresh (no store call)."""
    repository = session.repository
    return CatalogResponse.from_catalog(repository.catalog, repository)


@router.post("/refresh", response_model=CatalogResponse)
async def refresh_catalog(session: UnlockedSession):
    """Re-list the bucket and replace the catalog.

    On failure the previous catalog stays in place and a 503 is returned.
    """
    repository = session.repository
    try:
        catalog = await repository.list_documents()
    except StoreUnavailable:
        metrics.catalog_refresh_total.labels(status="error").inc()
        raise
    metrics.catalog_refresh_total.labels(status="success").inc()
    return CatalogResponse.from_catalog(catalog, repository)


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: Annotated[UploadFile, File(...)],
    session: UnlockedSession,
):
    """Upload one file under a timestamped, sanitized key.

    Any file type is accepted. The catalog is re-listed after the upload.

    Example:
        curl -X POST https://dataroom.example.com/api/v1/documents \\
             -H "Authorization: Bearer $TOKEN" \\
             -F "file=@Q3 Financials (v2).xlsx"
    """
    repository = session.repository
    data = await file.read()

    try:
        document = await repository.upload(data, file.filename or "", content_type=file.content_type)
    except StoreUnavailable:
        # Upload landed, the follow-up listing did not
        metrics.documents_uploaded_total.labels(status="success").inc()
        metrics.catalog_refresh_total.labels(status="error").inc()
        raise
    except DataRoomError:
        metrics.documents_uploaded_total.labels(status="rejected").inc()
        raise

    metrics.documents_uploaded_total.labels(status="success").inc()
    metrics.catalog_refresh_total.labels(status="success").inc()
    metrics.upload_size_bytes.observe(len(data))

    return UploadResponse(
        document=DocumentResponse.from_document(document, repository),
        catalog=CatalogResponse.from_catalog(repository.catalog, repository),
    )


@router.delete("/{storage_key}", response_model=CatalogResponse)
async def delete_document(
    storage_key: str,
    session: UnlockedSession,
    confirm: bool = Query(False, description="Must be true: the user confirmed the deletion"),
):
    """Delete a document and return the refreshed catalog."""
    if not confirm:
        raise DeletionNotConfirmed()

    repository = session.repository
    try:
        await repository.delete(storage_key)
    except StoreUnavailable:
        metrics.documents_deleted_total.labels(status="success").inc()
        metrics.catalog_refresh_total.labels(status="error").inc()
        raise
    except DataRoomError:
        metrics.documents_deleted_total.labels(status="rejected").inc()
        raise

    metrics.documents_deleted_total.labels(status="success").inc()
    metrics.catalog_refresh_total.labels(status="success").inc()

    return CatalogResponse.from_catalog(repository.catalog, repository)


@router.get("/{storage_key}/url", response_model=PublicUrlResponse)
async def get_public_url(storage_key: str, session: UnlockedSession):
    return PublicUrlResponse(
        storage_key=storage_key,
        public_url=session.repository.public_url_for(storage_key),
    )
