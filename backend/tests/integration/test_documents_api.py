"""Integration tests for the documents API

Catalog, refresh, upload, delete and public URLs against the in-memory
store.
"""

import asyncio
import io

import pytest
from fastapi.testclient import TestClient

from dataroom.domain.documents.ports.object_storage_port import StorageError


def _upload(client: TestClient, filename: str, content: bytes = b"%PDF-1.4\ntest content\n"):
    files = {"file": (filename, io.BytesIO(content), "application/pdf")}
    return client.post("/api/v1/documents", files=files)


class TestCatalog:
    """Tests for GET /api/v1/documents and POST /api/v1/documents/refresh"""

    def test_empty_catalog(self, unlocked_client: TestClient):
        response = unlocked_client.get("/api/v1/documents")
        assert response.status_code == 200
        assert response.json() == {"documents": [], "count": 0}

    def test_catalog_requires_unlocked_gate(self, client: TestClient):
        response = client.get("/api/v1/documents")
        assert response.status_code == 401

    def test_get_does_not_call_store(self, unlocked_client: TestClient, storage):
        asyncio.run(storage.upload("1716400000000_external.pdf", b"x"))

        response = unlocked_client.get("/api/v1/documents")

        assert response.json()["count"] == 0

    def test_refresh_picks_up_external_changes(self, unlocked_client: TestClient, storage):
        asyncio.run(storage.upload("1716400000000_external.pdf", b"x"))

        response = unlocked_client.post("/api/v1/documents/refresh")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["documents"][0]["display_name"] == "external.pdf"
        assert data["documents"][0]["public_url"] == "memory://test-dataroom/1716400000000_external.pdf"

    def test_refresh_lists_only_deletable_keys(self, unlocked_client: TestClient, storage):
        asyncio.run(storage.upload("reports/1716400000000_q3.pdf", b"x"))
        asyncio.run(storage.upload("1716400000001_deck.pdf", b"x"))

        keys = [doc["storage_key"] for doc in unlocked_client.post("/api/v1/documents/refresh").json()["documents"]]

        assert keys == ["1716400000001_deck.pdf"]
        for key in keys:
            response = unlocked_client.delete(f"/api/v1/documents/{key}", params={"confirm": "true"})
            assert response.status_code == 200

    def test_refresh_failure_keeps_catalog(self, unlocked_client: TestClient, storage, monkeypatch):
        _upload(unlocked_client, "deck.pdf")

        async def failing_list(prefix="", limit=100):
            raise StorageError("AccessDenied")

        monkeypatch.setattr(storage, "list_objects", failing_list)
        response = unlocked_client.post("/api/v1/documents/refresh")

        assert response.status_code == 503
        assert response.json()["error"] == "store_unavailable"
        assert unlocked_client.get("/api/v1/documents").json()["count"] == 1


class TestUpload:
    """Tests for POST /api/v1/documents"""

    def test_upload_my_file(self, unlocked_client: TestClient, storage):
        response = _upload(unlocked_client, "My File.PDF")

        assert response.status_code == 201
        data = response.json()
        document = data["document"]
        prefix, _, rest = document["storage_key"].partition("_")
        assert prefix.isdigit()
        assert rest == "my_file.pdf"
        assert document["display_name"] == "my_file.pdf"
        assert document["kind"] == "pdf"
        assert document["size_bytes"] == len(b"%PDF-1.4\ntest content\n")
        assert data["catalog"]["count"] == 1
        assert storage.read(document["storage_key"]) == b"%PDF-1.4\ntest content\n"

    def test_upload_any_file_type(self, unlocked_client: TestClient):
        response = _upload(unlocked_client, "notes.txt", b"plain text")
        assert response.status_code == 201
        assert response.json()["document"]["kind"] == "other"

    def test_upload_too_large(self, unlocked_client: TestClient, settings):
        response = _upload(unlocked_client, "huge.pdf", b"x" * (settings.MAX_UPLOAD_SIZE_BYTES + 1))
        assert response.status_code == 502
        assert response.json()["error"] == "upload_rejected"

    def test_upload_rejected_by_store(self, unlocked_client: TestClient, storage, monkeypatch):
        async def failing_upload(key, data, content_type=None, overwrite=True):
            raise StorageError("QuotaExceeded")

        monkeypatch.setattr(storage, "upload", failing_upload)
        response = _upload(unlocked_client, "deck.pdf")

        assert response.status_code == 502
        assert response.json() == {"error": "upload_rejected", "message": "QuotaExceeded"}

    def test_upload_without_file(self, unlocked_client: TestClient):
        response = unlocked_client.post("/api/v1/documents")
        assert response.status_code == 422

    def test_upload_requires_unlocked_gate(self, client: TestClient):
        assert _upload(client, "deck.pdf").status_code == 401


class TestDelete:
    """Tests for DELETE /api/v1/documents/{storage_key}"""

    def test_delete(self, unlocked_client: TestClient):
        key = _upload(unlocked_client, "deck.pdf").json()["document"]["storage_key"]

        response = unlocked_client.delete(f"/api/v1/documents/{key}", params={"confirm": "true"})

        assert response.status_code == 200
        assert response.json() == {"documents": [], "count": 0}
        refreshed = unlocked_client.post("/api/v1/documents/refresh").json()
        assert key not in [doc["storage_key"] for doc in refreshed["documents"]]

    @pytest.mark.parametrize("params", [{}, {"confirm": "false"}])
    def test_delete_requires_confirmation(self, unlocked_client: TestClient, params):
        key = _upload(unlocked_client, "deck.pdf").json()["document"]["storage_key"]

        response = unlocked_client.delete(f"/api/v1/documents/{key}", params=params)

        assert response.status_code == 400
        assert response.json()["error"] == "deletion_not_confirmed"
        assert unlocked_client.get("/api/v1/documents").json()["count"] == 1

    def test_delete_rejected_by_store(self, unlocked_client: TestClient, storage, monkeypatch):
        key = _upload(unlocked_client, "deck.pdf").json()["document"]["storage_key"]

        async def failing_remove(keys):
            raise StorageError("AccessDenied")

        monkeypatch.setattr(storage, "remove", failing_remove)
        response = unlocked_client.delete(f"/api/v1/documents/{key}", params={"confirm": "true"})

        assert response.status_code == 502
        assert response.json()["error"] == "delete_rejected"
        assert unlocked_client.get("/api/v1/documents").json()["count"] == 1


class TestPublicUrl:
    """Tests for GET /api/v1/documents/{storage_key}/url"""

    def test_public_url(self, unlocked_client: TestClient):
        response = unlocked_client.get("/api/v1/documents/1716400000000_deck.pdf/url")
        assert response.status_code == 200
        assert response.json() == {
            "storage_key": "1716400000000_deck.pdf",
            "public_url": "memory://test-dataroom/1716400000000_deck.pdf",
        }
