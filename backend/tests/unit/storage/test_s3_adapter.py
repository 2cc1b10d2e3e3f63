"""Unit tests for S3 Storage Adapter using moto

Covers listing, upload, remove, public URL derivation and bucket checks
against a mocked S3 bucket.
"""

import boto3
import pytest
from moto import mock_aws

from dataroom.domain.documents.ports.object_storage_port import StorageError, StoredObject
from dataroom.infrastructure.storage.s3_storage_adapter import S3StorageAdapter


# Test constants
TEST_BUCKET = "test-dataroom-bucket"
TEST_REGION = "us-east-1"
TEST_ACCESS_KEY = "test-access-key"
TEST_SECRET_KEY = "test-secret-key"


def _adapter(bucket_name=TEST_BUCKET, endpoint_url=None, public_base_url=None):
    return S3StorageAdapter(
        endpoint_url=endpoint_url,
        access_key=TEST_ACCESS_KEY,
        secret_key=TEST_SECRET_KEY,
        bucket_name=bucket_name,
        region=TEST_REGION,
        public_base_url=public_base_url,
    )


@pytest.fixture
def s3_client():
    """Mock S3 environment with the test bucket"""
    with mock_aws():
        client = boto3.client(
            "s3",
            region_name=TEST_REGION,
            aws_access_key_id=TEST_ACCESS_KEY,
            aws_secret_access_key=TEST_SECRET_KEY,
        )
        client.create_bucket(Bucket=TEST_BUCKET)
        yield client


@pytest.fixture
def storage_adapter(s3_client):
    return _adapter()


class TestS3AdapterInitialization:
    """Test S3 adapter initialization"""

    def test_adapter_creation_success(self):
        with mock_aws():
            adapter = _adapter()
            assert adapter.bucket_name == TEST_BUCKET
            assert adapter.region == TEST_REGION

    def test_adapter_with_minio_endpoint(self):
        with mock_aws():
            adapter = _adapter(endpoint_url="http://localhost:9000/")
            assert adapter.endpoint_url == "http://localhost:9000"


class TestListObjects:
    """Test bucket listing"""

    @pytest.mark.asyncio
    async def test_empty_bucket(self, storage_adapter):
        assert await storage_adapter.list_objects() == []

    @pytest.mark.asyncio
    async def test_lists_objects_in_key_order(self, storage_adapter, s3_client):
        s3_client.put_object(Bucket=TEST_BUCKET, Key="1716400000002_b.pdf", Body=b"bb")
        s3_client.put_object(Bucket=TEST_BUCKET, Key="1716400000001_a.pdf", Body=b"a")

        objects = await storage_adapter.list_objects()

        assert [obj.name for obj in objects] == ["1716400000001_a.pdf", "1716400000002_b.pdf"]
        assert objects[0].size_bytes == 1
        assert objects[0].updated_at is not None
        assert objects[0].created_at is None

    @pytest.mark.asyncio
    async def test_limit(self, storage_adapter, s3_client):
        for i in range(5):
            s3_client.put_object(Bucket=TEST_BUCKET, Key=f"171640000000{i}_doc.pdf", Body=b"x")

        objects = await storage_adapter.list_objects(limit=3)

        assert len(objects) == 3

    @pytest.mark.asyncio
    async def test_skips_folder_placeholders(self, storage_adapter, s3_client):
        s3_client.put_object(Bucket=TEST_BUCKET, Key="archive/", Body=b"")
        s3_client.put_object(Bucket=TEST_BUCKET, Key="1716400000000_deck.pdf", Body=b"x")

        objects = await storage_adapter.list_objects()

        assert [obj.name for obj in objects] == ["1716400000000_deck.pdf"]

    @pytest.mark.asyncio
    async def test_lists_bucket_root_only(self, storage_adapter, s3_client):
        s3_client.put_object(Bucket=TEST_BUCKET, Key="reports/1716400000000_q3.pdf", Body=b"x")
        s3_client.put_object(Bucket=TEST_BUCKET, Key="1716400000001_deck.pdf", Body=b"x")

        objects = await storage_adapter.list_objects()

        assert [obj.name for obj in objects] == ["1716400000001_deck.pdf"]

    @pytest.mark.asyncio
    async def test_missing_bucket_raises(self, s3_client):
        adapter = _adapter(bucket_name="no-such-bucket")
        with pytest.raises(StorageError) as exc_info:
            await adapter.list_objects()
        assert "NoSuchBucket" in exc_info.value.reason


class TestUpload:
    """Test object upload"""

    @pytest.mark.asyncio
    async def test_upload_success(self, storage_adapter, s3_client):
        stored = await storage_adapter.upload(
            "1716400000000_deck.pdf", b"%PDF-1.4", content_type="application/pdf"
        )

        assert isinstance(stored, StoredObject)
        assert stored.name == "1716400000000_deck.pdf"
        assert stored.size_bytes == 8

        response = s3_client.get_object(Bucket=TEST_BUCKET, Key="1716400000000_deck.pdf")
        assert response["Body"].read() == b"%PDF-1.4"
        assert response["ContentType"] == "application/pdf"

    @pytest.mark.asyncio
    async def test_upload_overwrites(self, storage_adapter, s3_client):
        await storage_adapter.upload("1716400000000_deck.pdf", b"first")
        await storage_adapter.upload("1716400000000_deck.pdf", b"second", overwrite=True)

        response = s3_client.get_object(Bucket=TEST_BUCKET, Key="1716400000000_deck.pdf")
        assert response["Body"].read() == b"second"

    @pytest.mark.asyncio
    async def test_upload_without_overwrite_rejects_existing(self, storage_adapter):
        await storage_adapter.upload("1716400000000_deck.pdf", b"first")

        with pytest.raises(StorageError, match="already exists"):
            await storage_adapter.upload("1716400000000_deck.pdf", b"second", overwrite=False)

    @pytest.mark.asyncio
    async def test_upload_without_overwrite_new_key(self, storage_adapter):
        stored = await storage_adapter.upload("1716400000000_new.pdf", b"x", overwrite=False)
        assert stored.name == "1716400000000_new.pdf"

    @pytest.mark.asyncio
    async def test_upload_to_missing_bucket(self, s3_client):
        adapter = _adapter(bucket_name="no-such-bucket")
        with pytest.raises(StorageError):
            await adapter.upload("1716400000000_deck.pdf", b"x")


class TestRemove:
    """Test object removal"""

    @pytest.mark.asyncio
    async def test_remove(self, storage_adapter):
        await storage_adapter.upload("1716400000000_a.pdf", b"a")
        await storage_adapter.upload("1716400000001_b.pdf", b"b")

        await storage_adapter.remove(["1716400000000_a.pdf"])

        objects = await storage_adapter.list_objects()
        assert [obj.name for obj in objects] == ["1716400000001_b.pdf"]

    @pytest.mark.asyncio
    async def test_remove_missing_key(self, storage_adapter):
        await storage_adapter.remove(["1716400000000_missing.pdf"])
        assert await storage_adapter.list_objects() == []

    @pytest.mark.asyncio
    async def test_remove_nothing(self, storage_adapter):
        await storage_adapter.remove([])


class TestPublicUrl:
    """Test public URL derivation"""

    def test_aws_virtual_hosted_url(self, storage_adapter):
        assert storage_adapter.public_url("1716400000000_deck.pdf") == (
            f"https://{TEST_BUCKET}.s3.{TEST_REGION}.amazonaws.com/1716400000000_deck.pdf"
        )

    def test_custom_endpoint_path_style(self, s3_client):
        adapter = _adapter(endpoint_url="http://localhost:9000")
        assert adapter.public_url("1716400000000_deck.pdf") == (
            f"http://localhost:9000/{TEST_BUCKET}/1716400000000_deck.pdf"
        )

    def test_public_base_url_wins(self, s3_client):
        adapter = _adapter(
            endpoint_url="http://localhost:9000",
            public_base_url="https://cdn.example.com/dataroom/",
        )
        assert adapter.public_url("1716400000000_deck.pdf") == (
            "https://cdn.example.com/dataroom/1716400000000_deck.pdf"
        )

    def test_key_is_quoted(self, storage_adapter):
        url = storage_adapter.public_url("uploaded by hand.pdf")
        assert url.endswith("/uploaded%20by%20hand.pdf")


class TestVerifyBucket:
    """Test bucket verification"""

    @pytest.mark.asyncio
    async def test_bucket_exists(self, storage_adapter):
        assert await storage_adapter.verify_bucket_exists() is True

    @pytest.mark.asyncio
    async def test_bucket_missing(self, s3_client):
        adapter = _adapter(bucket_name="no-such-bucket")
        assert await adapter.verify_bucket_exists() is False
