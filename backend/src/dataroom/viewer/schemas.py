"""Viewer API request/response schemas"""

from typing import Optional

from pydantic import BaseModel, Field

from ..documents.schemas import DocumentResponse


class SelectDocumentRequest(BaseModel):
    storage_key: str = Field(..., min_length=1, description="Key of the document to preview")


class ViewerResponse(BaseModel):
    """Current viewer selection; ``document`` is null when nothing is selected"""
    document: Optional[DocumentResponse] = None
    in_catalog: bool = Field(False, description="Whether the selection is in the current catalog")
