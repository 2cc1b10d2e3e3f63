"""Viewer selection - which single document is being previewed."""

from dataclasses import dataclass
from typing import Optional

from ..documents.document import Document


@dataclass(frozen=True)
class ViewerSelection:
    document: Optional[Document] = None

    @property
    def is_empty(self) -> bool:
        return self.document is None


class ViewerSession:
    """Holds at most one selected document.

    Purely presentational: selecting has no effect on the catalog or the
    store, and a document missing from the current catalog may be selected.
    """

    def __init__(self):
        self._selection = ViewerSelection()

    @property
    def selection(self) -> ViewerSelection:
        return self._selection

    def select(self, document: Document) -> ViewerSelection:
        self._selection = ViewerSelection(document=document)
        return self._selection

    def clear(self) -> None:
        self._selection = ViewerSelection()
