"""Document API request/response schemas"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..domain.documents.document import Catalog, Document, DocumentKind
from ..domain.documents.repository import DocumentRepository


class DocumentResponse(BaseModel):
    """One document in the catalog"""
    storage_key: str = Field(..., description="Key in the bucket (<epoch-millis>_<name>)")
    display_name: str = Field(..., description="Storage key without the timestamp prefix")
    kind: DocumentKind = Field(..., description="Coarse file type")
    created_at: Optional[datetime] = Field(None, description="Creation time reported by the store")
    updated_at: Optional[datetime] = Field(None, description="Last update reported by the store")
    last_modified: Optional[datetime] = Field(None, description="updated_at, falling back to created_at")
    size_bytes: Optional[int] = Field(None, description="File size in bytes, if known")
    public_url: str = Field(..., description="Public download/preview URL")

    @classmethod
    def from_document(cls, document: Document, repository: DocumentRepository) -> "DocumentResponse":
        return cls(
            storage_key=document.storage_key,
            display_name=document.display_name,
            kind=document.kind,
            created_at=document.created_at,
            updated_at=document.updated_at,
            last_modified=document.last_modified,
            size_bytes=document.size_bytes,
            public_url=repository.public_url_for(document.storage_key),
        )


class CatalogResponse(BaseModel):
    """Catalog snapshot"""
    documents: List[DocumentResponse] = Field(..., description="Documents in store listing order")
    count: int = Field(..., description="Number of documents")

    @classmethod
    def from_catalog(cls, catalog: Catalog, repository: DocumentRepository) -> "CatalogResponse":
        documents = [DocumentResponse.from_document(doc, repository) for doc in catalog]
        return cls(documents=documents, count=len(documents))


class UploadResponse(BaseModel):
    """Response for upload endpoint"""
    document: DocumentResponse = Field(..., description="The uploaded document")
    catalog: CatalogResponse = Field(..., description="Catalog after the post-upload refresh")


class PublicUrlResponse(BaseModel):
    storage_key: str
    public_url: str
