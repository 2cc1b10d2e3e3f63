"""Viewer endpoints

Select the single document being previewed, read the selection back, or
clear it. Selection never touches the store; a key that is not in the
current catalog can still be selected.
"""

from fastapi import APIRouter

from ..documents.schemas import DocumentResponse
from ..domain.documents.document import Document
from ..gate.dependencies import UnlockedSession
from ..gate.sessions import DataRoomSession
from .schemas import SelectDocumentRequest, ViewerResponse

router = APIRouter(prefix="/viewer", tags=["Viewer"])


def _viewer_response(session: DataRoomSession) -> ViewerResponse:
    document = session.viewer.selection.document
    if document is None:
        return ViewerResponse(document=None, in_catalog=False)
    return ViewerResponse(
        document=DocumentResponse.from_document(document, session.repository),
        in_catalog=document.storage_key in {doc.storage_key for doc in session.repository.catalog},
    )


@router.get("", response_model=ViewerResponse)
async def get_selection(session: UnlockedSession):
    return _viewer_response(session)


@router.put("", response_model=ViewerResponse)
async def select_document(request: SelectDocumentRequest, session: UnlockedSession):
    """Select a document, replacing any previous selection."""
    document = next(
        (doc for doc in session.repository.catalog if doc.storage_key == request.storage_key),
        None,
    )
    if document is None:
        document = Document(storage_key=request.storage_key)
    session.viewer.select(document)
    return _viewer_response(session)


@router.delete("", response_model=ViewerResponse)
async def clear_selection(session: UnlockedSession):
    session.viewer.clear()
    return _viewer_response(session)
