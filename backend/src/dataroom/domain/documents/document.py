"""Document and catalog types

A Document is one object in the bucket. Nothing about it is persisted apart
from the object itself; display name, kind and public URL are all derived.
"""

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from .ports.object_storage_port import StoredObject
from .sanitizer import display_name_for


class DocumentKind(str, enum.Enum):
    """Coarse file type used by the front end to pick an icon."""
    PDF = "pdf"
    DOC = "doc"
    XLS = "xls"
    PPT = "ppt"
    ZIP = "zip"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: str) -> "DocumentKind":
        # Substring match, so ".docx" counts as DOC and ".xlsx" as XLS
        lowered = name.lower()
        for kind in (cls.PDF, cls.DOC, cls.XLS, cls.PPT, cls.ZIP):
            if f".{kind.value}" in lowered:
                return kind
        return cls.OTHER


@dataclass(frozen=True)
class Document:
    """One stored file.

    Attributes:
        storage_key: Unique key in the bucket (``<epoch-millis>_<name>``)
        created_at: Creation time reported by the store, if any
        updated_at: Last modification time reported by the store, if any
        size_bytes: Object size reported by the store, if any
    """
    storage_key: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    size_bytes: Optional[int] = None

    @classmethod
    def from_stored_object(cls, stored: StoredObject) -> "Document":
        return cls(
            storage_key=stored.name,
            created_at=stored.created_at,
            updated_at=stored.updated_at,
            size_bytes=stored.size_bytes,
        )

    @property
    def display_name(self) -> str:
        return display_name_for(self.storage_key)

    @property
    def last_modified(self) -> Optional[datetime]:
        return self.updated_at or self.created_at

    @property
    def kind(self) -> DocumentKind:
        return DocumentKind.from_name(self.storage_key)


Catalog = Tuple[Document, ...]
