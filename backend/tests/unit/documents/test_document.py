"""Unit tests for Document and DocumentKind"""

from datetime import datetime, timezone

import pytest

from dataroom.domain.documents.document import Document, DocumentKind
from dataroom.domain.documents.ports.object_storage_port import StoredObject


class TestDocumentKind:
    """Test DocumentKind.from_name"""

    @pytest.mark.parametrize("name,expected", [
        ("1716400000000_deck.pdf", DocumentKind.PDF),
        ("1716400000000_memo.docx", DocumentKind.DOC),
        ("1716400000000_memo.doc", DocumentKind.DOC),
        ("1716400000000_model.xlsx", DocumentKind.XLS),
        ("1716400000000_pitch.pptx", DocumentKind.PPT),
        ("1716400000000_archive.zip", DocumentKind.ZIP),
        ("1716400000000_notes.txt", DocumentKind.OTHER),
        ("1716400000000_README", DocumentKind.OTHER),
        ("1716400000000_DECK.PDF", DocumentKind.PDF),
    ])
    def test_from_name(self, name, expected):
        assert DocumentKind.from_name(name) == expected

    def test_substring_match_uses_first_listed_kind(self):
        # ".pdf" is checked before ".zip"
        assert DocumentKind.from_name("bundle.pdf.zip") == DocumentKind.PDF


class TestDocument:
    """Test Document derived properties"""

    def test_display_name_strips_prefix(self):
        document = Document(storage_key="1716400000000_q3_financials_v2.xlsx")
        assert document.display_name == "q3_financials_v2.xlsx"
        assert document.kind == DocumentKind.XLS

    def test_last_modified_prefers_updated_at(self):
        created = datetime(2024, 5, 1, tzinfo=timezone.utc)
        updated = datetime(2024, 5, 2, tzinfo=timezone.utc)
        document = Document(storage_key="1_a.pdf", created_at=created, updated_at=updated)
        assert document.last_modified == updated

    def test_last_modified_falls_back_to_created_at(self):
        created = datetime(2024, 5, 1, tzinfo=timezone.utc)
        document = Document(storage_key="1_a.pdf", created_at=created)
        assert document.last_modified == created

    def test_last_modified_absent(self):
        assert Document(storage_key="1_a.pdf").last_modified is None

    def test_from_stored_object(self):
        updated = datetime(2024, 5, 2, tzinfo=timezone.utc)
        stored = StoredObject(name="1716400000000_deck.pdf", updated_at=updated, size_bytes=42)
        document = Document.from_stored_object(stored)
        assert document.storage_key == "1716400000000_deck.pdf"
        assert document.created_at is None
        assert document.updated_at == updated
        assert document.size_bytes == 42

    def test_documents_are_immutable(self):
        document = Document(storage_key="1_a.pdf")
        with pytest.raises(AttributeError):
            document.storage_key = "2_b.pdf"
