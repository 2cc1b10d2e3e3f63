"""Documents domain module - filename sanitization, catalog, repository"""

from .document import Catalog, Document, DocumentKind
from .repository import CATALOG_PAGE_SIZE, DocumentRepository
from .sanitizer import (
    build_storage_key,
    current_epoch_millis,
    display_name_for,
    sanitize_filename,
)

__all__ = [
    "Catalog",
    "Document",
    "DocumentKind",
    "CATALOG_PAGE_SIZE",
    "DocumentRepository",
    "build_storage_key",
    "current_epoch_millis",
    "display_name_for",
    "sanitize_filename",
]
